"""Timer scheduling for the auto-advance delay and the elapsed-time ticker."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from PySide6.QtCore import QObject, QTimer


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once or after it fired."""


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        ...

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        ...


class _QtTimerHandle:
    def __init__(self, timer: QTimer, callback: Callable[[], None], single_shot: bool) -> None:
        self._timer = timer
        self._callback = callback
        self._single_shot = single_shot
        self._active = True
        timer.setSingleShot(single_shot)
        timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._active

    def _on_timeout(self) -> None:
        if not self._active:
            return
        if self._single_shot:
            self._release()
        self._callback()

    def cancel(self) -> None:
        if self._active:
            self._timer.stop()
            self._release()

    def _release(self) -> None:
        self._active = False
        self._timer.deleteLater()


class QtScheduler:
    """Scheduler backed by ``QTimer``; needs a running Qt event loop.

    Timers are parented to an owner ``QObject`` so Qt, not Python garbage
    collection, decides when they are destroyed.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        self._owner = QObject(parent)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> _QtTimerHandle:
        return self._start(delay_ms, callback, single_shot=True)

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> _QtTimerHandle:
        return self._start(interval_ms, callback, single_shot=False)

    def _start(self, interval_ms: int, callback: Callable[[], None], single_shot: bool) -> _QtTimerHandle:
        timer = QTimer(self._owner)
        timer.setInterval(interval_ms)
        handle = _QtTimerHandle(timer, callback, single_shot)
        timer.start()
        return handle
