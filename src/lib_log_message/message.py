"""Read-only view over a single log record and the request it was logged in.

Purpose
-------
Give log formatters and targets one object to query for everything they might
print: the record's own fields plus console/web request details, session and
user identifiers, and the target-specific prefix.

Contents
--------
* :class:`LogMessage` - the view; every field is computed on access.

System Role
-----------
Sits between the domain records and the presentation adapters. It only reads
its collaborators; the single piece of internal state is the memoized answer
to "is this a console request".
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rich.pretty import pretty_repr

from .application.ports import DebugFormatter, LevelNameResolver, LogTargetPort
from .domain.context import AmbientContext, ConsoleRequest, WebRequest
from .domain.errors import ConfigurationError
from .domain.levels import level_name
from .domain.record import ErrorText, PlainText, RawLogRecord


class LogMessage:
    """Wrap a :class:`RawLogRecord` and expose presentation fields.

    Parameters
    ----------
    record:
        The record to present. A positional ``[text, level, category,
        timestamp, traces]`` sequence is converted with
        :meth:`RawLogRecord.from_sequence`.
    target:
        Optional :class:`LogTargetPort` supplying the prefix.
    context:
        Ambient request context; ``None`` means no application is running.
    level_names:
        Resolver turning level codes into display names.
    debug_formatter:
        Renderer for message values that are neither strings nor exceptions.

    Raises
    ------
    ConfigurationError
        If ``target`` is given but does not implement :class:`LogTargetPort`.

    Examples
    --------
    >>> message = LogMessage(RawLogRecord("hello", 20, "app", 1000.0))
    >>> message.text, message.level, message.prefix, message.stack_trace
    ('hello', 'info', '', None)
    """

    __slots__ = ("_record", "_target", "_context", "_level_names", "_debug_formatter", "_is_console_request")

    def __init__(
        self,
        record: RawLogRecord | Sequence[Any],
        target: LogTargetPort | None = None,
        *,
        context: AmbientContext | None = None,
        level_names: LevelNameResolver = level_name,
        debug_formatter: DebugFormatter = pretty_repr,
    ) -> None:
        if not isinstance(record, RawLogRecord):
            if isinstance(record, (str, bytes)) or not isinstance(record, Sequence):
                raise TypeError(f"record must be a RawLogRecord or a positional sequence, got {type(record).__name__}")
            record = RawLogRecord.from_sequence(record)
        if target is not None and not isinstance(target, LogTargetPort):
            raise ConfigurationError(f"`{type(self).__name__}.target` should implement `{LogTargetPort.__name__}`, got `{type(target).__name__}`.")
        self._record = record
        self._target = target
        self._context = context
        self._level_names = level_names
        self._debug_formatter = debug_formatter
        self._is_console_request: bool | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(record={self._record!r}, target={self._target!r})"

    @property
    def record(self) -> RawLogRecord:
        return self._record

    @property
    def target(self) -> LogTargetPort | None:
        return self._target

    @property
    def context(self) -> AmbientContext | None:
        return self._context

    @property
    def category(self) -> str:
        """Return the message category."""

        return self._record.category

    @property
    def level(self) -> str:
        """Return the display name of the message level."""

        return self._level_names(self._record.level)

    @property
    def text(self) -> str:
        """Return the message text.

        Strings pass through, exceptions render as a traceback, anything else
        goes through the debug formatter.
        """

        text = self._record.text
        if isinstance(text, PlainText):
            return text.value
        if isinstance(text, ErrorText):
            return text.render()
        return self._debug_formatter(text.value)

    @property
    def timestamp(self) -> float:
        """Return the message creation timestamp."""

        return self._record.timestamp

    @property
    def stack_trace(self) -> str | None:
        """Return the captured call trace, ``None`` if not available."""

        frames = self._record.stack_frames
        if not frames:
            return None
        return "\n".join(str(frame) for frame in frames)

    @property
    def prefix(self) -> str:
        """Return the string the target wants prepended to the message."""

        if self._target is None:
            return ""
        return self._target.compute_prefix(self._record)

    @property
    def is_console_request(self) -> bool:
        """Return whether the record was logged while serving a console request.

        Raises
        ------
        ConfigurationError
            If there is no ambient context or its request is of unknown kind.
        """

        if self._is_console_request is None and self._context is not None:
            request = self._context.request
            if isinstance(request, ConsoleRequest):
                self._is_console_request = True
            elif isinstance(request, WebRequest):
                self._is_console_request = False
        if self._is_console_request is None:
            raise ConfigurationError("Unable to determine if the application is a console or web application.")
        return self._is_console_request

    @property
    def command_line(self) -> str | None:
        """Return the command line, ``None`` if not available."""

        if self._context is None or not self.is_console_request:
            return None
        request = self._context.request
        if request.argv is None:
            return ""
        return " ".join(request.argv)

    @property
    def session_id(self) -> str | None:
        """Return the session ID, ``None`` if not available."""

        if self._context is None:
            return None
        session = self._context.session
        if session is None or not session.is_active:
            return None
        return session.id

    @property
    def url(self) -> str | None:
        """Return the current absolute URL, ``None`` if not available."""

        if self._context is None or self.is_console_request:
            return None
        request = self._context.request
        return request.absolute_url

    @property
    def user_id(self) -> int | str | None:
        """Return the user identity ID, ``None`` if not available."""

        if self._context is None or self._context.user is None:
            return None
        identity = self._context.user.get_identity(auto_renew=False)
        if identity is None:
            return None
        return identity.id

    @property
    def user_ip(self) -> str | None:
        """Return the user IP address, ``None`` if not available."""

        if self._context is None or self.is_console_request:
            return None
        request = self._context.request
        return request.user_ip

    def to_dict(self) -> dict[str, Any]:
        """Return every field as a dictionary.

        Fields that depend on the console/web distinction are ``None`` when
        it cannot be determined, instead of raising.
        """

        data: dict[str, Any] = {
            "category": self.category,
            "level": self.level,
            "text": self.text,
            "timestamp": self.timestamp,
            "stack_trace": self.stack_trace,
            "prefix": self.prefix,
            "session_id": self.session_id,
            "user_id": self.user_id,
        }
        try:
            is_console = self.is_console_request
        except ConfigurationError:
            data.update(is_console_request=None, command_line=None, url=None, user_ip=None)
        else:
            data.update(
                is_console_request=is_console,
                command_line=self.command_line,
                url=self.url,
                user_ip=self.user_ip,
            )
        return data


__all__ = ["LogMessage"]
