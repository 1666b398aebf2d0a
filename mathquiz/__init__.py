"""Interactive arithmetic quiz engine."""

from mathquiz.core.models import Problem, QuizResult, SessionPhase, SessionState
from mathquiz.core.quiz_controller import QuizController

__all__ = [
    "Problem",
    "QuizController",
    "QuizResult",
    "SessionPhase",
    "SessionState",
]
