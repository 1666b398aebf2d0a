"""State transitions for a quiz session.

Every transition is a pure function ``(state, event) -> Transition``: the new
immutable ``SessionState`` plus the effects (timers to start or cancel, a
result to emit) the caller must carry out. Scheduled effects are tagged with
the session generation so a stale advance or tick can be recognised and
dropped after the problem set was replaced or the quiz retried.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from mathquiz.core.answer_resolver import resolve_problems
from mathquiz.core.models import Problem, QuizResult, SessionPhase, SessionState
from mathquiz.core.services.grading import grade
from mathquiz.core.settings import QuizSettings
from mathquiz.core.translator import Translator

# --- Effects ----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ScheduleAdvance:
    """Move past ``index`` (or finish) once the advance delay has elapsed."""

    generation: int
    index: int
    problem_count: int


@dataclass(frozen=True, slots=True)
class CancelPendingAdvances:
    pass


@dataclass(frozen=True, slots=True)
class StartTicker:
    generation: int


@dataclass(frozen=True, slots=True)
class StopTicker:
    pass


@dataclass(frozen=True, slots=True)
class EmitResult:
    result: QuizResult


Effect = ScheduleAdvance | CancelPendingAdvances | StartTicker | StopTicker | EmitResult

# --- Events -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LoadProblems:
    problems: tuple[Problem, ...]


@dataclass(frozen=True, slots=True)
class SubmitAnswer:
    problem_id: int
    answer: float


@dataclass(frozen=True, slots=True)
class AdvanceDue:
    advance: ScheduleAdvance


@dataclass(frozen=True, slots=True)
class Finish:
    problems: tuple[Problem, ...] | None = None


@dataclass(frozen=True, slots=True)
class Retry:
    pass


@dataclass(frozen=True, slots=True)
class GoToPrevious:
    pass


@dataclass(frozen=True, slots=True)
class GoToNext:
    pass


@dataclass(frozen=True, slots=True)
class Tick:
    generation: int


@dataclass(frozen=True, slots=True)
class Teardown:
    pass


@dataclass(frozen=True, slots=True)
class Transition:
    state: SessionState
    effects: tuple[Effect, ...] = ()


# --- Transitions ------------------------------------------------------------


def load_problems(state: SessionState, problems: Sequence[Problem]) -> Transition:
    """Replace the problem set; resolves answers and starts a fresh generation."""
    generation = state.generation + 1
    resolved = tuple(resolve_problems(problems))
    new_state = SessionState(problems=resolved, generation=generation)
    effects: list[Effect] = [CancelPendingAdvances(), StopTicker()]
    if resolved:
        effects.append(StartTicker(generation))
    return Transition(new_state, tuple(effects))


def submit_answer(
    state: SessionState, problem_id: int, answer: float, settings: QuizSettings
) -> Transition:
    if state.phase is not SessionPhase.ACTIVE:
        return Transition(state)
    position = next((i for i, p in enumerate(state.problems) if p.id == problem_id), -1)
    if position < 0 or state.problems[position].is_answered:
        return Transition(state)

    problems = list(state.problems)
    problems[position] = problems[position].answered(answer, settings.answer_tolerance)
    new_state = replace(state, problems=tuple(problems))
    advance = ScheduleAdvance(
        generation=state.generation,
        index=state.current_index,
        problem_count=len(problems),
    )
    return Transition(new_state, (advance,))


def apply_advance(
    state: SessionState, advance: ScheduleAdvance, translate: Translator
) -> Transition:
    if advance.generation != state.generation or state.phase is not SessionPhase.ACTIVE:
        return Transition(state)
    if advance.index >= advance.problem_count - 1:
        # The live snapshot of this generation already holds every answer
        # the payload saw, plus any given since.
        return finish(state, translate)
    next_index = min(advance.index + 1, len(state.problems) - 1)
    return Transition(replace(state, current_index=next_index))


def finish(
    state: SessionState,
    translate: Translator,
    problems: Sequence[Problem] | None = None,
) -> Transition:
    if state.phase is not SessionPhase.ACTIVE:
        return Transition(state)
    final_problems = tuple(problems) if problems is not None else state.problems
    if not final_problems:
        return Transition(state)
    result = grade(final_problems, translate)
    new_state = replace(state, problems=final_problems, completed=True, result=result)
    return Transition(new_state, (CancelPendingAdvances(), StopTicker(), EmitResult(result)))


def retry(state: SessionState) -> Transition:
    """Start the same, already-resolved problems over from the first one."""
    if state.phase is not SessionPhase.COMPLETED:
        return Transition(state)
    generation = state.generation + 1
    new_state = SessionState(
        problems=tuple(problem.cleared() for problem in state.problems),
        generation=generation,
    )
    return Transition(
        new_state, (CancelPendingAdvances(), StopTicker(), StartTicker(generation))
    )


def go_to_previous(state: SessionState) -> Transition:
    if state.phase is not SessionPhase.ACTIVE or state.current_index == 0:
        return Transition(state)
    return Transition(replace(state, current_index=state.current_index - 1))


def go_to_next(state: SessionState) -> Transition:
    if state.phase is not SessionPhase.ACTIVE:
        return Transition(state)
    if state.current_index >= len(state.problems) - 1:
        return Transition(state)
    return Transition(replace(state, current_index=state.current_index + 1))


def tick(state: SessionState, generation: int) -> Transition:
    if generation != state.generation or state.phase is not SessionPhase.ACTIVE:
        return Transition(state)
    return Transition(replace(state, elapsed_seconds=state.elapsed_seconds + 1))


def teardown(state: SessionState) -> Transition:
    """Invalidate everything scheduled for the current session."""
    new_state = replace(state, generation=state.generation + 1)
    return Transition(new_state, (CancelPendingAdvances(), StopTicker()))


def reduce(
    state: SessionState,
    event: object,
    translate: Translator,
    settings: QuizSettings,
) -> Transition:
    """Apply ``event`` to ``state``. Unknown events raise ``TypeError``."""
    if isinstance(event, LoadProblems):
        return load_problems(state, event.problems)
    if isinstance(event, SubmitAnswer):
        return submit_answer(state, event.problem_id, event.answer, settings)
    if isinstance(event, AdvanceDue):
        return apply_advance(state, event.advance, translate)
    if isinstance(event, Finish):
        return finish(state, translate, event.problems)
    if isinstance(event, Retry):
        return retry(state)
    if isinstance(event, GoToPrevious):
        return go_to_previous(state)
    if isinstance(event, GoToNext):
        return go_to_next(state)
    if isinstance(event, Tick):
        return tick(state, event.generation)
    if isinstance(event, Teardown):
        return teardown(state)
    raise TypeError(f"Unsupported quiz event: {event!r}")
