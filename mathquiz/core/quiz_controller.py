"""Drives a quiz session for the UI layer."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import partial
import logging
import math

from mathquiz.core.models import Problem, QuizResult, SessionPhase, SessionState
from mathquiz.core.services import quiz_session
from mathquiz.core.services.quiz_session import (
    AdvanceDue,
    CancelPendingAdvances,
    EmitResult,
    Finish,
    GoToNext,
    GoToPrevious,
    LoadProblems,
    Retry,
    ScheduleAdvance,
    StartTicker,
    StopTicker,
    SubmitAnswer,
    Teardown,
    Tick,
)
from mathquiz.core.services.timers import Scheduler, TimerHandle
from mathquiz.core.settings import QuizSettings
from mathquiz.core.translator import MessageCatalog, Translator
from mathquiz.utils.time_format import format_elapsed

logger = logging.getLogger(__name__)


class QuizController:
    """Facade over the session state machine and its timers.

    Holds the current ``SessionState``, applies transitions, and carries out
    their effects through ``scheduler``. Misuse (submitting twice, navigating
    out of range, retrying an unfinished quiz) is ignored rather than raised.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        translate: Translator | None = None,
        on_quiz_complete: Callable[[QuizResult], None] | None = None,
        settings: QuizSettings | None = None,
        on_state_changed: Callable[[SessionState], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._translate = translate or MessageCatalog()
        self._on_quiz_complete = on_quiz_complete
        self._on_state_changed = on_state_changed
        self._settings = settings or QuizSettings()

        self._state = SessionState()
        self._source: Sequence[Problem] | None = None
        self._enabled: bool = True
        self._disposed: bool = False
        self._pending_advances: dict[int, TimerHandle] = {}
        self._next_advance_id: int = 0
        self._ticker: TimerHandle | None = None

    # --- Read access for the UI ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> SessionPhase:
        return self._state.phase

    @property
    def problems(self) -> tuple[Problem, ...]:
        return self._state.problems

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def current_problem(self) -> Problem | None:
        return self._state.current_problem

    @property
    def elapsed_seconds(self) -> int:
        return self._state.elapsed_seconds

    @property
    def formatted_elapsed(self) -> str:
        return format_elapsed(self._state.elapsed_seconds)

    @property
    def is_completed(self) -> bool:
        return self._state.completed

    @property
    def result(self) -> QuizResult | None:
        return self._state.result

    @property
    def can_go_previous(self) -> bool:
        return self.phase is SessionPhase.ACTIVE and self._state.current_index > 0

    @property
    def can_go_next(self) -> bool:
        return (
            self.phase is SessionPhase.ACTIVE
            and self._state.current_index < len(self._state.problems) - 1
        )

    @property
    def progress_percentage(self) -> int:
        total = len(self._state.problems)
        if not total:
            return 0
        return int(math.floor((self._state.current_index + 1) / total * 100 + 0.5))

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    # --- Operations ---

    def set_problems(self, problems: Sequence[Problem]) -> None:
        """Start a new session when the supplied list differs by identity."""
        if self._disposed or problems is self._source:
            return
        self._source = problems
        self._dispatch(LoadProblems(tuple(problems)))

    def submit_answer(self, problem_id: int, answer: float) -> None:
        if not self._enabled:
            return
        self._dispatch(SubmitAnswer(problem_id, answer))

    def go_to_previous(self) -> None:
        self._dispatch(GoToPrevious())

    def go_to_next(self) -> None:
        self._dispatch(GoToNext())

    def finish(self) -> None:
        self._dispatch(Finish())

    def retry(self) -> None:
        self._dispatch(Retry())

    def dispose(self) -> None:
        """Cancel the ticker and any pending advance; the controller goes inert."""
        if self._disposed:
            return
        self._dispatch(Teardown())
        self._disposed = True

    # --- Internals ---

    def _dispatch(self, event: object) -> None:
        if self._disposed:
            return
        transition = quiz_session.reduce(self._state, event, self._translate, self._settings)
        changed = transition.state is not self._state
        self._state = transition.state
        for effect in transition.effects:
            self._run_effect(effect)
        if changed and self._on_state_changed is not None:
            self._on_state_changed(self._state)

    def _run_effect(self, effect: object) -> None:
        if isinstance(effect, ScheduleAdvance):
            advance_id = self._next_advance_id
            self._next_advance_id += 1
            self._pending_advances[advance_id] = self._scheduler.call_later(
                self._settings.advance_delay_ms,
                partial(self._on_advance_due, advance_id, effect),
            )
        elif isinstance(effect, CancelPendingAdvances):
            for handle in self._pending_advances.values():
                handle.cancel()
            self._pending_advances.clear()
        elif isinstance(effect, StartTicker):
            self._stop_ticker()
            self._ticker = self._scheduler.call_repeating(
                self._settings.tick_interval_ms,
                partial(self._on_tick, effect.generation),
            )
        elif isinstance(effect, StopTicker):
            self._stop_ticker()
        elif isinstance(effect, EmitResult):
            logger.info(
                "Quiz completed: %s/%s correct, score %s (%s)",
                effect.result.correct_answers,
                effect.result.total_problems,
                effect.result.score,
                effect.result.grade,
            )
            if self._on_quiz_complete is not None:
                self._on_quiz_complete(effect.result)

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None

    def _on_advance_due(self, advance_id: int, advance: ScheduleAdvance) -> None:
        self._pending_advances.pop(advance_id, None)
        if advance.generation != self._state.generation:
            logger.debug("Dropping advance scheduled for generation %s", advance.generation)
            return
        self._dispatch(AdvanceDue(advance))

    def _on_tick(self, generation: int) -> None:
        if generation != self._state.generation:
            logger.debug("Dropping tick for generation %s", generation)
            return
        self._dispatch(Tick(generation))
