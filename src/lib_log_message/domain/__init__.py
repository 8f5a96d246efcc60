"""Domain entities and value objects behind the log message view."""

from __future__ import annotations

from .context import AmbientContext, AmbientContextBinder, ConsoleRequest, WebRequest
from .errors import ConfigurationError
from .levels import LogLevel, level_name
from .record import (
    ErrorText,
    MessageText,
    PlainText,
    RawLogRecord,
    StackFrame,
    ValueText,
    capture_stack_frames,
    to_message_text,
)

__all__ = [
    "AmbientContext",
    "AmbientContextBinder",
    "ConfigurationError",
    "ConsoleRequest",
    "ErrorText",
    "LogLevel",
    "MessageText",
    "PlainText",
    "RawLogRecord",
    "StackFrame",
    "ValueText",
    "WebRequest",
    "capture_stack_frames",
    "level_name",
    "to_message_text",
]
