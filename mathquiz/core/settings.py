"""Runtime configuration for quiz sessions."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import os

from mathquiz.constants.quiz_constants import (
    ADVANCE_DELAY_MS,
    ANSWER_TOLERANCE,
    TICK_INTERVAL_MS,
)

_ENV_PREFIX = "MATHQUIZ_"


@dataclass(frozen=True, slots=True)
class QuizSettings:
    """Timings and answer tolerance used by a quiz controller."""

    advance_delay_ms: int = ADVANCE_DELAY_MS
    tick_interval_ms: int = TICK_INTERVAL_MS
    answer_tolerance: float = ANSWER_TOLERANCE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> QuizSettings:
        """Build settings, overriding defaults from ``MATHQUIZ_*`` variables."""
        env = os.environ if environ is None else environ
        return cls(
            advance_delay_ms=_read(env, "ADVANCE_DELAY_MS", int, ADVANCE_DELAY_MS),
            tick_interval_ms=_read(env, "TICK_INTERVAL_MS", int, TICK_INTERVAL_MS),
            answer_tolerance=_read(env, "ANSWER_TOLERANCE", float, ANSWER_TOLERANCE),
        )


def _read(env: Mapping[str, str], name: str, cast, default):
    variable = _ENV_PREFIX + name
    raw = env.get(variable)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ValueError(f"{variable} must be a number, got {raw!r}") from None
    if not value >= 0:
        raise ValueError(f"{variable} must be a non-negative number, got {raw!r}")
    return value
