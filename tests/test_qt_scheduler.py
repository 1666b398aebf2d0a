"""QtScheduler under a real Qt event loop (QtCore only, no GUI needed)."""

import pytest
from PySide6.QtCore import QCoreApplication, QEventLoop, QTimer

from mathquiz.core.models import Problem
from mathquiz.core.quiz_controller import QuizController
from mathquiz.core.services.timers import QtScheduler
from mathquiz.core.settings import QuizSettings


@pytest.fixture(scope="module")
def qt_app():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


def _run_event_loop(ms: int) -> None:
    loop = QEventLoop()
    QTimer.singleShot(ms, loop.quit)
    loop.exec()


def test_call_later_fires_once(qt_app):
    scheduler = QtScheduler()
    calls = []
    handle = scheduler.call_later(10, lambda: calls.append("fired"))
    _run_event_loop(150)
    assert calls == ["fired"]
    assert not handle.active
    handle.cancel()


def test_cancelled_timer_never_fires(qt_app):
    scheduler = QtScheduler()
    calls = []
    handle = scheduler.call_later(50, lambda: calls.append("fired"))
    handle.cancel()
    handle.cancel()
    _run_event_loop(150)
    assert calls == []


def test_call_repeating_until_cancelled(qt_app):
    scheduler = QtScheduler()
    calls = []
    handle = scheduler.call_repeating(10, lambda: calls.append(1))
    _run_event_loop(200)
    handle.cancel()
    count = len(calls)
    assert count >= 2
    _run_event_loop(100)
    assert len(calls) == count


def test_controller_auto_advances_on_qt_loop(qt_app):
    results = []
    settings = QuizSettings(advance_delay_ms=20, tick_interval_ms=1000)
    controller = QuizController(QtScheduler(), on_quiz_complete=results.append, settings=settings)
    controller.set_problems([Problem(id=1, text="2 + 3 = "), Problem(id=2, text="4 × 5 = ")])

    controller.submit_answer(1, 5)
    _run_event_loop(200)
    assert controller.current_index == 1

    controller.submit_answer(2, 20)
    _run_event_loop(200)
    assert results and results[0].score == 100
    controller.dispose()
