from __future__ import annotations

import pytest

from mathquiz.core.models import Problem, QuizResult
from mathquiz.core.quiz_controller import QuizController
from mathquiz.core.translator import MessageCatalog


class ManualTimer:
    def __init__(self, scheduler: ManualScheduler, due_ms: int, callback, interval_ms: int | None) -> None:
        self.scheduler = scheduler
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic scheduler: time only moves when ``advance`` is called."""

    def __init__(self) -> None:
        self.now_ms = 0
        self.timers: list[ManualTimer] = []

    def call_later(self, delay_ms, callback):
        timer = ManualTimer(self, self.now_ms + delay_ms, callback, None)
        self.timers.append(timer)
        return timer

    def call_repeating(self, interval_ms, callback):
        timer = ManualTimer(self, self.now_ms + interval_ms, callback, interval_ms)
        self.timers.append(timer)
        return timer

    def active_timers(self) -> list[ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [t for t in self.active_timers() if t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_ms)
            self.now_ms = timer.due_ms
            if timer.interval_ms is None:
                timer.cancelled = True
            else:
                timer.due_ms += timer.interval_ms
            timer.callback()
        self.now_ms = target


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def translate() -> MessageCatalog:
    return MessageCatalog()


@pytest.fixture
def raw_problems() -> list[Problem]:
    return [
        Problem(id=1, text="2 + 3 = "),
        Problem(id=2, text="4 × 5 = "),
        Problem(id=3, text="10 - 2 = "),
    ]


@pytest.fixture
def results() -> list[QuizResult]:
    return []


@pytest.fixture
def controller(scheduler, results) -> QuizController:
    return QuizController(scheduler, on_quiz_complete=results.append)
