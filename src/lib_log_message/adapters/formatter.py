"""Stdlib :mod:`logging` formatter rendering records through :class:`LogMessage`.

Purpose
-------
Let any ``logging.Handler`` print request-aware lines (prefix, user, session,
URL, call trace) without the application threading that data through every
logging call.

Contents
--------
* :data:`DEFAULT_TEMPLATE` - ``{date} {prefix}[{level}][{category}] {text}``.
* :data:`AMBIENT_CONTEXT` - process-wide :class:`AmbientContextBinder` used
  when no explicit context provider is configured.
* :class:`CallSiteFilter` - records the issuing call site while the logging
  call is still on the stack.
* :class:`MessageFormatter` - the formatter.

System Role
-----------
Outermost adapter: converts ``logging.LogRecord`` into
:class:`~lib_log_message.domain.record.RawLogRecord`, wraps it in a view,
and fills the template from :func:`build_format_payload`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from lib_log_message.application.ports import LogTargetPort
from lib_log_message.domain.context import AmbientContext, AmbientContextBinder
from lib_log_message.domain.record import _INTERNAL_PATHS, ErrorText, RawLogRecord, capture_stack_frames
from lib_log_message.message import LogMessage

from ._formatting import build_format_payload, template_fields
from .target import PrefixTarget

if TYPE_CHECKING:
    from lib_log_message.config import MessageSettings

DEFAULT_TEMPLATE = "{date} {prefix}[{level}][{category}] {text}"

AMBIENT_CONTEXT = AmbientContextBinder()
"""Binder consulted by formatters that were not given a context provider."""

_TRACE_INDENT = "\n    "


class CallSiteFilter(logging.Filter):
    """Store the call site on each record as ``record.stack_frames``.

    Attach it to the logger or to the ``QueueHandler`` when records are
    formatted on another thread (``QueueListener``). By then the stack no
    longer contains the logging call, so :class:`MessageFormatter` cannot
    capture it itself. Frames already present on the record are kept.

    Examples
    --------
    >>> record = logging.LogRecord("app", logging.INFO, __file__, 1, "hi", None, None)
    >>> CallSiteFilter(trace_level=0).filter(record), record.stack_frames
    (True, ())
    """

    def __init__(self, trace_level: int, name: str = "") -> None:
        super().__init__(name)
        self._trace_level = trace_level

    def filter(self, record: logging.LogRecord) -> bool:
        if not super().filter(record):
            return False
        if getattr(record, "stack_frames", None) is None:
            record.stack_frames = capture_stack_frames(self._trace_level, skip_paths=_INTERNAL_PATHS)
        return True


class MessageFormatter(logging.Formatter):
    """Format :class:`logging.LogRecord` instances via :class:`LogMessage`.

    Parameters
    ----------
    template:
        ``str.format`` template using the placeholders of
        :func:`build_format_payload`. Captured frames are appended below the
        line, one per row, unless the template places ``{stack_trace}``
        itself.
    target:
        Prefix provider; defaults to a :class:`PrefixTarget` sharing this
        formatter's context provider.
    context_provider:
        Zero-argument callable returning the current :class:`AmbientContext`.
        Defaults to :data:`AMBIENT_CONTEXT`.current.
    trace_level:
        Number of call-site frames captured per record (0 disables capture).
        Records carrying ``stack_frames`` (see :class:`CallSiteFilter`) are
        used as they are.
    not_available:
        Text substituted for fields without a value.

    Examples
    --------
    >>> import logging
    >>> record = logging.LogRecord("app", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    >>> MessageFormatter("[{level}][{category}] {text}").format(record)
    '[info][app] hello world'
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        *,
        target: LogTargetPort | None = None,
        context_provider: Callable[[], AmbientContext | None] | None = None,
        trace_level: int = 0,
        not_available: str = "-",
    ) -> None:
        super().__init__()
        self._template = template
        self._inline_trace = "stack_trace" in template_fields(template)
        self._context_provider = context_provider or AMBIENT_CONTEXT.current
        self._target = target if target is not None else PrefixTarget(self._context_provider)
        self._trace_level = trace_level
        self._not_available = not_available

    @classmethod
    def from_settings(
        cls,
        settings: "MessageSettings",
        *,
        target: LogTargetPort | None = None,
        context_provider: Callable[[], AmbientContext | None] | None = None,
    ) -> "MessageFormatter":
        """Build a formatter from resolved :class:`MessageSettings`."""

        return cls(
            settings.template,
            target=target,
            context_provider=context_provider,
            trace_level=settings.trace_level,
            not_available=settings.not_available,
        )

    @property
    def template(self) -> str:
        return self._template

    def build_message(self, record: logging.LogRecord) -> LogMessage:
        """Return the :class:`LogMessage` view for ``record``."""

        raw = RawLogRecord.from_log_record(record, trace_level=self._trace_level)
        return LogMessage(raw, self._target, context=self._context_provider())

    def format(self, record: logging.LogRecord) -> str:
        message = self.build_message(record)
        line = self._template.format_map(build_format_payload(message, not_available=self._not_available))

        if message.record.stack_frames and not self._inline_trace:
            line += _TRACE_INDENT + _TRACE_INDENT.join(str(frame) for frame in message.record.stack_frames)

        if not _text_shows_exception(message, record):
            if record.exc_info and not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)
            if record.exc_text:
                line += "\n" + record.exc_text
        if record.stack_info:
            line += "\n" + self.formatStack(record.stack_info)
        return line


def _text_shows_exception(message: LogMessage, record: logging.LogRecord) -> bool:
    """Return whether the message text already renders ``record.exc_info``.

    True for ``logger.exception(err)``, where the logged object is the active
    exception.
    """

    text = message.record.text
    return bool(record.exc_info) and isinstance(text, ErrorText) and text.error is record.exc_info[1]


__all__ = ["AMBIENT_CONTEXT", "CallSiteFilter", "DEFAULT_TEMPLATE", "MessageFormatter"]
