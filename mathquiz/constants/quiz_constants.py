"""Quiz-related constants shared across the engine."""

ADVANCE_DELAY_MS: int = 1500
TICK_INTERVAL_MS: int = 1000
ANSWER_TOLERANCE: float = 0.001
MAX_NESTING_DEPTH: int = 100

# Inclusive lower bounds, checked highest first.
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "excellent"),
    (80, "good"),
    (70, "average"),
    (60, "passing"),
)
FALLBACK_GRADE: str = "needsImprovement"

GRADE_KEY_TEMPLATE: str = "quiz.grades.{grade}"
FEEDBACK_KEY_TEMPLATE: str = "quiz.feedback.{grade}"
