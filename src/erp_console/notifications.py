from __future__ import annotations

from collections import deque
from dataclasses import asdict, dataclass, field
from typing import Any

TOAST_LEVELS = ("success", "info", "warning", "error")


@dataclass(frozen=True)
class Toast:
    level: str
    title: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class NotificationCenter:
    """Toast queue for a page; mutation outcomes land here.

    Only the newest ``capacity`` toasts are kept.
    """

    capacity: int = 20
    _queue: deque[Toast] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._queue = deque(maxlen=self.capacity)

    def push(self, *, level: str, title: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
        if level not in TOAST_LEVELS:
            raise ValueError(f"Unsupported notification level: {level}")
        toast = Toast(level=level, title=title, message=message, details=dict(details or {}))
        self._queue.append(toast)
        return asdict(toast)

    def success(self, title: str, message: str, **details: Any) -> dict[str, Any]:
        return self.push(level="success", title=title, message=message, details=details)

    def warning(self, title: str, message: str, **details: Any) -> dict[str, Any]:
        return self.push(level="warning", title=title, message=message, details=details)

    def error(self, title: str, message: str, **details: Any) -> dict[str, Any]:
        return self.push(level="error", title=title, message=message, details=details)

    @property
    def messages(self) -> list[dict[str, Any]]:
        return [asdict(toast) for toast in self._queue]

    @property
    def latest(self) -> dict[str, Any] | None:
        return asdict(self._queue[-1]) if self._queue else None

    def clear(self) -> None:
        self._queue.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self._queue), "messages": self.messages}
