"""Computes ground-truth answers for problems from their display text."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
import logging
import math
import re

from mathquiz.core.expression import ExpressionError, evaluate
from mathquiz.core.models import Problem

logger = logging.getLogger(__name__)

# Applied in order before evaluation.
GLYPH_SUBSTITUTIONS: tuple[tuple[str, str], ...] = (
    ("×", "*"),
    ("✖", "*"),
    ("÷", "/"),
    ("➗", "/"),
)

_ANSWER_MARKER_RE = re.compile(r"\s*=\s*\??\s*$")


def expression_for(text: str) -> str:
    """Turn display text such as ``"4 × 5 = "`` into ``"4 * 5"``."""
    expression = _ANSWER_MARKER_RE.sub("", text)
    for glyph, operator in GLYPH_SUBSTITUTIONS:
        expression = expression.replace(glyph, operator)
    return expression


def resolve_problem(problem: Problem) -> Problem:
    """Return ``problem`` with its correct answer set and answer state reset.

    Unparseable expressions fall back to a correct answer of ``0`` so a single
    bad problem never blocks the session.
    """
    expression = expression_for(problem.text)
    try:
        correct_answer = evaluate(expression)
    except ExpressionError as exc:
        logger.error("Error calculating answer for %r: %s", expression, exc)
        correct_answer = 0.0
    else:
        if not math.isfinite(correct_answer):
            logger.warning(
                "Problem %s has no finite answer (%r evaluates to %s)",
                problem.id,
                expression,
                correct_answer,
            )
    return replace(
        problem,
        correct_answer=correct_answer,
        user_answer=None,
        is_correct=False,
        is_answered=False,
    )


def resolve_problems(problems: Iterable[Problem]) -> list[Problem]:
    return [resolve_problem(problem) for problem in problems]
