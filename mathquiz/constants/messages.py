"""Built-in English text for the quiz screens."""

DEFAULT_MESSAGES: dict[str, str] = {
    "quiz.loading": "Loading quiz...",
    "quiz.problemNumber": "Problem {{number}}",
    "quiz.progress": "{{current}} / {{total}}",
    "quiz.completed": "Quiz Completed!",
    "quiz.score": "Score",
    "quiz.retry": "Try Again",
    "quiz.backToPractice": "Back to Practice",
    "quiz.stats.totalProblems": "Total Problems",
    "quiz.stats.correct": "Correct",
    "quiz.stats.incorrect": "Incorrect",
    "quiz.stats.timeUsed": "Time Used",
    "quiz.grades.excellent": "Excellent",
    "quiz.grades.good": "Good",
    "quiz.grades.average": "Average",
    "quiz.grades.passing": "Passing",
    "quiz.grades.needsImprovement": "Needs Improvement",
    "quiz.feedback.excellent": "Outstanding work! You have mastered these problems.",
    "quiz.feedback.good": "Great job! Just a few more to perfect.",
    "quiz.feedback.average": "Nice effort. Keep practicing to improve your accuracy.",
    "quiz.feedback.passing": "You passed. Review the problems you missed and try again.",
    "quiz.feedback.needsImprovement": "Keep going! Practice makes perfect.",
}
