"""Public package surface of ``lib_log_message``.

The central type is :class:`LogMessage`, a read-only view over a
:class:`RawLogRecord` and the request it was logged in. Hosts using the
stdlib :mod:`logging` module attach :class:`MessageFormatter` to a handler and
bind an :class:`AmbientContext` per request via :data:`AMBIENT_CONTEXT`.
"""

from __future__ import annotations

import logging

from .adapters import (
    AMBIENT_CONTEXT,
    DEFAULT_TEMPLATE,
    CallSiteFilter,
    MessageFormatter,
    PrefixTarget,
    RichConsoleAdapter,
    StaticIdentity,
    StaticSession,
    StaticUser,
    build_format_payload,
)
from .application.ports import DebugFormatter, IdentityPort, LevelNameResolver, LogTargetPort, SessionPort, UserPort
from .config import MessageSettings, load_settings
from .domain import (
    AmbientContext,
    AmbientContextBinder,
    ConfigurationError,
    ConsoleRequest,
    ErrorText,
    LogLevel,
    MessageText,
    PlainText,
    RawLogRecord,
    StackFrame,
    ValueText,
    WebRequest,
    capture_stack_frames,
    level_name,
    to_message_text,
)
from .message import LogMessage

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AMBIENT_CONTEXT",
    "AmbientContext",
    "AmbientContextBinder",
    "CallSiteFilter",
    "ConfigurationError",
    "ConsoleRequest",
    "DEFAULT_TEMPLATE",
    "DebugFormatter",
    "ErrorText",
    "IdentityPort",
    "LevelNameResolver",
    "LogLevel",
    "LogMessage",
    "LogTargetPort",
    "MessageFormatter",
    "MessageSettings",
    "MessageText",
    "PlainText",
    "PrefixTarget",
    "RawLogRecord",
    "RichConsoleAdapter",
    "SessionPort",
    "StackFrame",
    "StaticIdentity",
    "StaticSession",
    "StaticUser",
    "UserPort",
    "ValueText",
    "WebRequest",
    "build_format_payload",
    "capture_stack_frames",
    "level_name",
    "load_settings",
    "to_message_text",
]
