from __future__ import annotations

import pytest

from erp_console.debounce import Debouncer, TimerDebouncer


class FakeTimer:
    def __init__(self, interval, function, args=()) -> None:
        self.interval = interval
        self.function = function
        self.args = args
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args)


class TimerFactory:
    def __init__(self) -> None:
        self.timers: list[FakeTimer] = []

    def __call__(self, interval, function, args=()) -> FakeTimer:
        timer = FakeTimer(interval, function, args)
        self.timers.append(timer)
        return timer


def test_only_final_value_commits(clock) -> None:
    debouncer = Debouncer(400, initial="", now=clock)
    for text in ("a", "ab", "abc"):
        debouncer.push(text)
        clock.advance_ms(100)
    assert debouncer.poll() is False
    clock.advance_ms(300)
    assert debouncer.poll() is True
    assert debouncer.committed == "abc"
    assert not debouncer.pending


def test_poll_reports_unchanged_value(clock) -> None:
    debouncer = Debouncer(400, initial="tea", now=clock)
    debouncer.push("te")
    debouncer.push("tea")
    clock.advance_ms(400)
    assert debouncer.poll() is False
    assert debouncer.committed == "tea"


def test_cancel_and_flush(clock) -> None:
    debouncer = Debouncer(400, initial="", now=clock)
    debouncer.push("draft")
    debouncer.cancel()
    assert debouncer.raw == ""
    clock.advance_ms(500)
    assert debouncer.poll() is False
    debouncer.push("now")
    assert debouncer.flush() is True
    assert debouncer.committed == "now"


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        Debouncer(-1)


def test_timer_debouncer_fires_latest_only() -> None:
    committed: list[str] = []
    factory = TimerFactory()
    debouncer = TimerDebouncer(400, committed.append, initial="", timer_factory=factory)

    debouncer.push("a")
    debouncer.push("ab")
    first, second = factory.timers
    assert first.cancelled and second.started and second.daemon
    assert second.interval == pytest.approx(0.4)

    # A timer that was superseded is ignored even if it fires late.
    first.fire()
    assert committed == []
    second.fire()
    assert committed == ["ab"]
    assert not debouncer.pending


def test_timer_debouncer_flush_and_cancel() -> None:
    committed: list[str] = []
    factory = TimerFactory()
    debouncer = TimerDebouncer(400, committed.append, initial="", timer_factory=factory)

    debouncer.push("x")
    debouncer.flush()
    assert committed == ["x"]

    debouncer.push("y")
    debouncer.cancel()
    factory.timers[-1].fire()
    assert committed == ["x"]
    assert debouncer.raw == "x"
