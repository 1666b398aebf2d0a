"""Service for turning answered problems into a score and grade."""

from __future__ import annotations

from collections.abc import Sequence
import math

from mathquiz.constants.quiz_constants import (
    FALLBACK_GRADE,
    FEEDBACK_KEY_TEMPLATE,
    GRADE_KEY_TEMPLATE,
    GRADE_THRESHOLDS,
)
from mathquiz.core.models import Problem, QuizResult
from mathquiz.core.translator import Translator


def compute_score(correct_answers: int, total_problems: int) -> int:
    """Percentage of correct answers, rounded half up to an integer."""
    if total_problems <= 0:
        raise ValueError("Cannot score an empty problem set.")
    return int(math.floor(correct_answers / total_problems * 100 + 0.5))


def grade_for_score(score: int) -> str:
    """Return the grade name (e.g. ``"good"``) for a 0-100 score."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return FALLBACK_GRADE


def grade(problems: Sequence[Problem], translate: Translator) -> QuizResult:
    """Build the result summary for a finished quiz.

    Unanswered problems count as incorrect. ``translate`` receives the
    ``quiz.grades.*`` and ``quiz.feedback.*`` keys for the grade reached.
    """
    total_problems = len(problems)
    correct_answers = sum(1 for problem in problems if problem.is_correct)
    score = compute_score(correct_answers, total_problems)
    grade_name = grade_for_score(score)
    return QuizResult(
        total_problems=total_problems,
        correct_answers=correct_answers,
        incorrect_answers=total_problems - correct_answers,
        score=score,
        grade=translate(GRADE_KEY_TEMPLATE.format(grade=grade_name)),
        feedback=translate(FEEDBACK_KEY_TEMPLATE.format(grade=grade_name)),
    )
