"""Log level abstraction shared by records, views, and formatters.

Purpose
-------
Offer a domain-specific representation of log severities that maps numeric
codes onto the display names printed by formatters.

Contents
--------
* :class:`LogLevel` enum with conversion helpers and presentation metadata.
* :func:`level_name` - the default code-to-name resolver used by
  :class:`~lib_log_message.message.LogMessage`.

System Role
-----------
Records store plain integer codes so stdlib ``logging`` levels flow through
untouched; this module is the single place that turns them into text.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels, numerically aligned with :mod:`logging`."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @property
    def severity(self) -> str:
        """Return the lowercase severity name used as the display name."""

        return self.name.lower()

    @property
    def code(self) -> str:
        """Return the four-letter abbreviation used by compact templates."""

        return _CODE_TABLE[self]

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on colored consoles."""

        return _ICON_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ICON_TABLE = {
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.CRITICAL: "☠",
}
# Console glyphs displayed by the Rich adapter per log level.

_CODE_TABLE = {
    LogLevel.DEBUG: "DEBG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERRO",
    LogLevel.CRITICAL: "CRIT",
}

UNKNOWN_LEVEL_NAME = "unknown"


def level_name(code: int) -> str:
    """Return the display name for a numeric level ``code``.

    Examples
    --------
    >>> level_name(20)
    'info'
    >>> level_name(7)
    'unknown'
    """

    try:
        return LogLevel.from_numeric(code).severity
    except ValueError:
        return UNKNOWN_LEVEL_NAME


__all__ = ["LogLevel", "UNKNOWN_LEVEL_NAME", "level_name"]
