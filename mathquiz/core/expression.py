"""Safe evaluation of the arithmetic shown in generated practice problems.

Supported grammar (left-associative, standard precedence)::

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := number | '(' expression ')'

Architecture note:
    Problem text comes from the generator and may be influenced by user
    settings, so it is never handed to ``eval``. A hand-written
    recursive-descent parser over a flat token list keeps the accepted
    language tiny and makes every rejection explicit. There is no unary minus;
    the generator never produces negative literals.
"""

from __future__ import annotations

import math
import re

from mathquiz.constants.quiz_constants import MAX_NESTING_DEPTH


class ExpressionError(ValueError):
    """Raised when an expression cannot be evaluated."""


class InvalidExpression(ExpressionError):
    """The expression contains characters outside the arithmetic alphabet."""


class MalformedExpression(ExpressionError):
    """The tokens do not form a complete expression."""


_WHITESPACE_RE = re.compile(r"\s+")
_ALLOWED_RE = re.compile(r"[0-9+\-*/().]+")
_TOKEN_RE = re.compile(r"\d+\.?\d*|[+\-*/()]")
_NUMBER_RE = re.compile(r"\d+\.?\d*")

_ADDITIVE = ("+", "-")
_MULTIPLICATIVE = ("*", "/")


def tokenize(expression: str) -> list[str]:
    """Split a whitespace-free expression into numbers and single-char operators."""
    if _ALLOWED_RE.fullmatch(expression) is None:
        raise InvalidExpression("Invalid characters in expression")
    tokens = _TOKEN_RE.findall(expression)
    # findall skips characters it cannot match (a lone '.' for instance)
    if "".join(tokens) != expression:
        raise MalformedExpression("Invalid expression format")
    return tokens


def _divide(dividend: float, divisor: float) -> float:
    if divisor != 0:
        return dividend / divisor
    if dividend == 0 or math.isnan(dividend):
        return math.nan
    return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)


class _Parser:
    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._position = 0
        self._depth = 0

    def _peek(self) -> str | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _advance(self) -> str | None:
        token = self._peek()
        self._position += 1
        return token

    def parse(self) -> float:
        value = self._expression()
        if self._position != len(self._tokens):
            raise MalformedExpression("Unexpected tokens after expression")
        return value

    def _expression(self) -> float:
        result = self._term()
        while self._peek() in _ADDITIVE:
            operator = self._advance()
            operand = self._term()
            result = result + operand if operator == "+" else result - operand
        return result

    def _term(self) -> float:
        result = self._factor()
        while self._peek() in _MULTIPLICATIVE:
            operator = self._advance()
            operand = self._factor()
            result = result * operand if operator == "*" else _divide(result, operand)
        return result

    def _factor(self) -> float:
        if self._peek() != "(":
            return self._number()
        self._advance()
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise MalformedExpression("Expression is nested too deeply")
        value = self._expression()
        if self._peek() != ")":
            raise MalformedExpression("Missing closing parenthesis")
        self._advance()
        self._depth -= 1
        return value

    def _number(self) -> float:
        token = self._advance()
        if token is None or _NUMBER_RE.fullmatch(token) is None:
            raise MalformedExpression("Expected number")
        return float(token)


def evaluate(expression: str) -> float:
    """Evaluate ``expression`` and return its value as a float.

    Whitespace is ignored. Division by zero is not an error: the result is
    ``inf``/``-inf``/``nan`` exactly as IEEE-754 division would give.

    Raises:
        InvalidExpression: characters outside ``[0-9+-*/().]`` are present.
        MalformedExpression: the tokens do not parse to completion.
    """
    cleaned = _WHITESPACE_RE.sub("", expression)
    return _Parser(tokenize(cleaned)).parse()
