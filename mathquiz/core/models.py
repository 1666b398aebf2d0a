"""Domain models for the quiz engine."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum, auto


@dataclass(frozen=True, slots=True)
class Problem:
    """One arithmetic exercise, e.g. ``"4 × 5 = "``.

    ``correct_answer`` stays ``None`` until the answer resolver has run.
    """

    id: int
    text: str
    correct_answer: float | None = None
    user_answer: float | None = None
    is_correct: bool = False
    is_answered: bool = False

    def answered(self, answer: float, tolerance: float) -> Problem:
        expected = self.correct_answer if self.correct_answer is not None else 0.0
        return replace(
            self,
            user_answer=answer,
            is_correct=abs(answer - expected) < tolerance,
            is_answered=True,
        )

    def cleared(self) -> Problem:
        return replace(self, user_answer=None, is_correct=False, is_answered=False)


@dataclass(frozen=True, slots=True)
class QuizResult:
    """Summary of a completed session."""

    total_problems: int
    correct_answers: int
    incorrect_answers: int
    score: int
    grade: str
    feedback: str


class SessionPhase(Enum):
    """Lifecycle phases of a quiz session."""
    LOADING = auto()
    ACTIVE = auto()
    COMPLETED = auto()


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of a quiz session.

    ``generation`` changes whenever the problem set is replaced or the quiz is
    retried; scheduled effects carry the generation they were created for.
    """

    problems: tuple[Problem, ...] = ()
    current_index: int = 0
    elapsed_seconds: int = 0
    completed: bool = False
    result: QuizResult | None = None
    generation: int = 0

    @property
    def phase(self) -> SessionPhase:
        if self.completed:
            return SessionPhase.COMPLETED
        if not self.problems:
            return SessionPhase.LOADING
        return SessionPhase.ACTIVE

    @property
    def current_problem(self) -> Problem | None:
        if 0 <= self.current_index < len(self.problems):
            return self.problems[self.current_index]
        return None
