"""Utilities that expose a log message as template placeholders.

Why
---
The stdlib formatter and the Rich console adapter accept the same
``str.format`` placeholders. Producing the payload in one place keeps both in
sync.

Contents
--------
* :func:`build_format_payload` - lazy placeholder mapping for a message.
* :func:`template_fields` - placeholder names a template references.

System Role
-----------
Bridges :class:`~lib_log_message.message.LogMessage` with the presentation
adapters. Placeholders are evaluated only when a template references them, so
a template that never mentions ``url`` works outside any request context.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from string import Formatter
from typing import Any, Callable

from lib_log_message.domain.levels import LogLevel
from lib_log_message.message import LogMessage


def _level_enum(message: LogMessage) -> LogLevel | None:
    try:
        return LogLevel.from_numeric(message.record.level)
    except ValueError:
        return None


def _accessors(message: LogMessage) -> dict[str, Callable[[], Any]]:
    def _datetime() -> datetime:
        return datetime.fromtimestamp(message.timestamp, tz=timezone.utc)

    def _icon() -> str:
        level = _level_enum(message)
        return level.icon if level is not None else ""

    return {
        "date": lambda: _datetime().strftime("%Y-%m-%d %H:%M:%S"),
        "timestamp": lambda: _datetime().isoformat(),
        "time": lambda: message.timestamp,
        "level": lambda: message.level,
        "LEVEL": lambda: message.level.upper(),
        "level_icon": _icon,
        "category": lambda: message.category,
        "text": lambda: message.text,
        "prefix": lambda: message.prefix,
        "stack_trace": lambda: message.stack_trace,
        "command_line": lambda: message.command_line,
        "session_id": lambda: message.session_id,
        "url": lambda: message.url,
        "user_id": lambda: message.user_id,
        "user_ip": lambda: message.user_ip,
    }


class _LazyPayload(Mapping[str, Any]):
    """Mapping that computes each placeholder on first lookup."""

    def __init__(self, accessors: dict[str, Callable[[], Any]], not_available: str) -> None:
        self._accessors = accessors
        self._not_available = not_available
        self._cache: dict[str, Any] = {}

    def __getitem__(self, key: str) -> Any:
        if key not in self._cache:
            value = self._accessors[key]()
            self._cache[key] = self._not_available if value is None else value
        return self._cache[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._accessors)

    def __len__(self) -> int:
        return len(self._accessors)


def template_fields(template: str) -> frozenset[str]:
    """Return the placeholder names referenced by a ``str.format`` template.

    Examples
    --------
    >>> sorted(template_fields("{text}\\n{stack_trace!s:>4} {{literal}}"))
    ['stack_trace', 'text']
    """

    names: set[str] = set()
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name:
            names.add(re.split(r"[.\[]", field_name, maxsplit=1)[0])
    return frozenset(names)


def build_format_payload(message: LogMessage, *, not_available: str = "-") -> Mapping[str, Any]:
    """Return the mapping of placeholders exposed to format templates.

    Examples
    --------
    >>> from lib_log_message.domain.record import RawLogRecord
    >>> payload = build_format_payload(LogMessage(RawLogRecord("hi", 40, "db", 0.0)))
    >>> "{date} [{level}][{category}] {text} {url}".format_map(payload)
    '1970-01-01 00:00:00 [error][db] hi -'
    """

    return _LazyPayload(_accessors(message), not_available)


__all__ = ["build_format_payload", "template_fields"]
