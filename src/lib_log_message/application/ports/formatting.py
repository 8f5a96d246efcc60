"""Callable ports used when turning record fields into text."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LevelNameResolver(Protocol):
    """Map a numeric level code to its display name."""

    def __call__(self, code: int) -> str: ...


@runtime_checkable
class DebugFormatter(Protocol):
    """Render an arbitrary value as human-readable text."""

    def __call__(self, value: Any) -> str: ...


__all__ = ["DebugFormatter", "LevelNameResolver"]
