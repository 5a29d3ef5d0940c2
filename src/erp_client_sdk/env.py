from __future__ import annotations

import os
from typing import Callable, TypeVar

N = TypeVar("N", int, float)

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


class EnvReader:
    """Typed access to ``os.environ`` that raises ``error`` naming the offending variable."""

    def __init__(self, error: Callable[[str], Exception] = ValueError) -> None:
        self.error = error

    def text(self, name: str, default: str = "") -> str:
        return (os.getenv(name) or default).strip()

    def flag(self, name: str, default: bool = False) -> bool:
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        return raw.strip().lower() in TRUE_VALUES

    def number(self, name: str, default: N, *, minimum: N | None = None, strict: bool = False) -> N:
        """Parse ``name`` as the type of ``default``; ``strict`` makes ``minimum`` exclusive."""
        kind = type(default)
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            value = default
        else:
            try:
                value = kind(raw.strip())
            except ValueError:
                noun = "an integer" if kind is int else "a number"
                raise self.error(f"Invalid {name}: expected {noun}, got {raw!r}") from None
        if minimum is not None:
            too_small = value <= minimum if strict else value < minimum
            if too_small:
                bound = ">" if strict else ">="
                raise self.error(f"Invalid {name}: expected {bound} {minimum}, got {value}")
        return value
