from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Raw value stream gated by an idle window into a committed value.

    ``push`` records the raw value and restarts the window; ``poll`` commits the
    last raw value once the window has elapsed with no further pushes, so values
    replaced within the window never become committed.
    """

    def __init__(self, wait_ms: int = 400, initial: T | None = None, now: Callable[[], float] | None = None) -> None:
        if wait_ms < 0:
            raise ValueError("wait_ms must be >= 0")
        self.wait_ms = wait_ms
        self._now = now or time.monotonic
        self._raw = initial
        self._committed = initial
        self._deadline: float | None = None

    @property
    def raw(self) -> T | None:
        return self._raw

    @property
    def committed(self) -> T | None:
        return self._committed

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def push(self, value: T) -> None:
        self._raw = value
        self._deadline = self._now() + self.wait_ms / 1000

    def poll(self) -> bool:
        """Commit if the idle window elapsed; True only when the committed value changed."""
        if self._deadline is None or self._now() < self._deadline:
            return False
        return self._commit()

    def flush(self) -> bool:
        if self._deadline is None:
            return False
        return self._commit()

    def cancel(self) -> None:
        self._deadline = None
        self._raw = self._committed

    def reset(self, value: T | None) -> None:
        self._deadline = None
        self._raw = value
        self._committed = value

    def _commit(self) -> bool:
        self._deadline = None
        changed = self._raw != self._committed
        self._committed = self._raw
        return changed


TimerFactory = Callable[..., Any]


class TimerDebouncer(Generic[T]):
    """Same contract as :class:`Debouncer`, driven by a cancellable timer thread."""

    def __init__(
        self,
        wait_ms: int,
        on_commit: Callable[[T], None],
        *,
        initial: T | None = None,
        timer_factory: TimerFactory = threading.Timer,
    ) -> None:
        if wait_ms < 0:
            raise ValueError("wait_ms must be >= 0")
        self.wait_ms = wait_ms
        self.on_commit = on_commit
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Any = None
        self._generation = 0
        self._raw = initial
        self._committed = initial

    @property
    def raw(self) -> T | None:
        return self._raw

    @property
    def committed(self) -> T | None:
        return self._committed

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def push(self, value: T) -> None:
        with self._lock:
            self._cancel_timer()
            self._raw = value
            self._generation += 1
            timer = self._timer_factory(self.wait_ms / 1000, self._fire, args=(self._generation,))
            timer.daemon = True
            self._timer = timer
        timer.start()

    def flush(self) -> None:
        with self._lock:
            if self._timer is None:
                return
            self._cancel_timer()
            generation = self._generation
        self._fire(generation)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            self._raw = self._committed

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A newer push owns the window.
            if generation != self._generation:
                return
            self._timer = None
            changed = self._raw != self._committed
            self._committed = self._raw
            value = self._committed
        if changed:
            self.on_commit(value)
