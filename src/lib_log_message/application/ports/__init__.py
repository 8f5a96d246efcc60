"""Protocols describing the collaborators the log message view queries."""

from __future__ import annotations

from .ambient import IdentityPort, SessionPort, UserPort
from .console import ConsolePort
from .formatting import DebugFormatter, LevelNameResolver
from .target import LogTargetPort

__all__ = [
    "ConsolePort",
    "DebugFormatter",
    "IdentityPort",
    "LevelNameResolver",
    "LogTargetPort",
    "SessionPort",
    "UserPort",
]
