"""Typed log record consumed by :class:`~lib_log_message.message.LogMessage`.

Purpose
-------
Replace the host logger's positional ``[text, level, category, timestamp,
traces]`` array with an immutable, validated value object.

Contents
--------
* :class:`StackFrame` - one ``file:line`` entry of a captured call trace.
* :class:`PlainText`, :class:`ErrorText`, :class:`ValueText` - the tagged
  union describing what was logged.
* :func:`to_message_text` - producer-side classification helper.
* :class:`RawLogRecord` - the record itself, with constructors for positional
  sequences and :class:`logging.LogRecord` instances.
* :func:`capture_stack_frames` - call-site trace capture.

System Role
-----------
Domain layer: pure data plus the conversions producers need. Rendering of the
text variants happens in the view so formatters stay swappable.
"""

from __future__ import annotations

import logging
import os
import traceback
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Iterable

from .levels import LogLevel


@dataclass(slots=True, frozen=True)
class StackFrame:
    """Single frame of a captured call trace."""

    file: str
    line: int

    def __post_init__(self) -> None:
        if not isinstance(self.file, str) or not self.file:
            raise ValueError("file must be a non-empty string")
        object.__setattr__(self, "line", int(self.line))

    def __str__(self) -> str:
        return f"in {self.file}:{self.line}"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "StackFrame":
        """Build a frame from a ``{"file": ..., "line": ...}`` mapping."""

        try:
            return cls(file=data["file"], line=data["line"])
        except KeyError as exc:
            raise ValueError(f"stack frame is missing {exc.args[0]!r}") from exc


@dataclass(slots=True, frozen=True)
class PlainText:
    """Message text that already is a string."""

    value: str


@dataclass(slots=True, frozen=True)
class ErrorText:
    """Message text carrying an exception instance."""

    error: BaseException

    def render(self) -> str:
        """Return the canonical traceback rendering of :attr:`error`.

        Examples
        --------
        >>> ErrorText(ValueError("boom")).render()
        'ValueError: boom'
        """

        lines = traceback.format_exception(type(self.error), self.error, self.error.__traceback__)
        return "".join(lines).rstrip("\n")


@dataclass(slots=True, frozen=True)
class ValueText:
    """Message text holding an arbitrary value that needs a debug dump."""

    value: Any


MessageText = PlainText | ErrorText | ValueText


def to_message_text(value: Any) -> MessageText:
    """Classify ``value`` into one of the :data:`MessageText` variants.

    Examples
    --------
    >>> to_message_text("hello")
    PlainText(value='hello')
    >>> to_message_text(["bar"])
    ValueText(value=['bar'])
    """

    if isinstance(value, (PlainText, ErrorText, ValueText)):
        return value
    if isinstance(value, str):
        return PlainText(value)
    if isinstance(value, BaseException):
        return ErrorText(value)
    return ValueText(value)


def _coerce_frame(frame: StackFrame | Mapping[str, Any]) -> StackFrame:
    if isinstance(frame, StackFrame):
        return frame
    if isinstance(frame, Mapping):
        return StackFrame.from_mapping(frame)
    raise TypeError(f"stack frames must be StackFrame or mapping instances, got {type(frame).__name__}")


def _is_within(filename: str, directory: str) -> bool:
    root = os.path.join(os.path.abspath(directory), "")
    return os.path.abspath(filename).startswith(root)


def capture_stack_frames(trace_level: int, *, skip_paths: Iterable[str] = ()) -> tuple[StackFrame, ...]:
    """Return up to ``trace_level`` frames of the caller's stack, innermost first.

    Frames whose file lives under one of ``skip_paths`` are ignored so the
    result points at application code rather than logging internals.
    """

    if trace_level <= 0:
        return ()
    skipped = tuple(skip_paths)
    frames: list[StackFrame] = []
    for summary in reversed(traceback.extract_stack()[:-1]):
        if any(_is_within(summary.filename, path) for path in skipped):
            continue
        frames.append(StackFrame(file=summary.filename, line=summary.lineno or 0))
        if len(frames) >= trace_level:
            break
    return tuple(frames)


_INTERNAL_PATHS = (
    os.path.dirname(logging.__file__),
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
)
# Directories skipped when capturing call sites from inside a logging handler.


@dataclass(slots=True, frozen=True)
class RawLogRecord:
    """Immutable log record as emitted by the host logger.

    Attributes
    ----------
    text:
        One of :class:`PlainText`, :class:`ErrorText`, :class:`ValueText`.
        Raw values are classified with :func:`to_message_text`.
    level:
        Numeric level code; :class:`LogLevel` members are stored as their code.
    category:
        Logging namespace, typically the logger name.
    timestamp:
        Creation time in seconds since the epoch.
    stack_frames:
        Captured call trace, empty when none was recorded.
    """

    text: MessageText
    level: int
    category: str
    timestamp: float
    stack_frames: tuple[StackFrame, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", to_message_text(self.text))

        level = self.level.value if isinstance(self.level, LogLevel) else self.level
        if isinstance(level, bool) or not isinstance(level, int):
            raise TypeError(f"level must be an integer code, got {self.level!r}")
        object.__setattr__(self, "level", level)

        if not isinstance(self.category, str):
            raise TypeError(f"category must be a string, got {type(self.category).__name__}")

        if isinstance(self.timestamp, bool) or not isinstance(self.timestamp, (int, float)):
            raise TypeError(f"timestamp must be a number of seconds, got {self.timestamp!r}")
        object.__setattr__(self, "timestamp", float(self.timestamp))

        object.__setattr__(self, "stack_frames", tuple(_coerce_frame(frame) for frame in (self.stack_frames or ())))

    @classmethod
    def from_sequence(cls, values: Sequence[Any]) -> "RawLogRecord":
        """Build a record from the host's positional ``[text, level, category, timestamp, traces]`` shape."""

        if isinstance(values, (str, bytes)) or len(values) not in (4, 5):
            raise ValueError("a raw log record needs 4 or 5 positional fields")
        text, level, category, timestamp = values[:4]
        frames = values[4] if len(values) == 5 else ()
        return cls(text=text, level=level, category=category, timestamp=timestamp, stack_frames=frames or ())

    @classmethod
    def from_log_record(cls, record: logging.LogRecord, *, trace_level: int = 0) -> "RawLogRecord":
        """Build a record from a stdlib :class:`logging.LogRecord`.

        ``extra={"stack_frames": [...]}`` on the logging call supplies frames
        explicitly; otherwise up to ``trace_level`` call-site frames are
        captured from the current stack.
        """

        message = record.msg
        if isinstance(message, str) or record.args:
            text: MessageText = PlainText(record.getMessage())
        else:
            text = to_message_text(message)

        frames = getattr(record, "stack_frames", None)
        if frames is None:
            frames = capture_stack_frames(trace_level, skip_paths=_INTERNAL_PATHS)

        return cls(
            text=text,
            level=record.levelno,
            category=record.name,
            timestamp=record.created,
            stack_frames=tuple(frames),
        )


__all__ = [
    "ErrorText",
    "MessageText",
    "PlainText",
    "RawLogRecord",
    "StackFrame",
    "ValueText",
    "capture_stack_frames",
    "to_message_text",
]
