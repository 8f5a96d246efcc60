"""Ambient request context handed to the log message view.

Purpose
-------
Model the application/request/session/user state a log formatter wants to
report, as an explicit value instead of process-wide singletons.

Contents
--------
* :class:`ConsoleRequest` / :class:`WebRequest` - the two request variants.
* :class:`AmbientContext` - immutable bundle of the optional collaborators.
* :class:`AmbientContextBinder` - :mod:`contextvars` stack so logging handlers
  can look up the context bound to the current request or task.

System Role
-----------
The view never reaches for globals; callers either pass an
:class:`AmbientContext` directly or let
:class:`~lib_log_message.adapters.formatter.MessageFormatter` pull it from a
binder.
"""

from __future__ import annotations

import contextvars
import sys
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from lib_log_message.application.ports import SessionPort, UserPort


@dataclass(slots=True, frozen=True)
class ConsoleRequest:
    """Non-interactive request triggered from the command line.

    Attributes
    ----------
    argv:
        Process invocation arguments; ``None`` when they are unavailable.
    """

    argv: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        if self.argv is not None:
            object.__setattr__(self, "argv", tuple(str(arg) for arg in self.argv))

    @classmethod
    def from_process(cls) -> "ConsoleRequest":
        """Snapshot the running interpreter's ``sys.argv``."""

        argv = getattr(sys, "argv", None)
        return cls(argv=tuple(argv) if argv is not None else None)


@dataclass(slots=True, frozen=True)
class WebRequest:
    """Interactive request served over the network."""

    absolute_url: str
    user_ip: str | None = None


@dataclass(slots=True, frozen=True)
class AmbientContext:
    """Request-scoped collaborators available while a record is formatted.

    Every member is optional. A view built without any context at all
    behaves as if no application is running.
    """

    request: ConsoleRequest | WebRequest | None = None
    session: "SessionPort | None" = None
    user: "UserPort | None" = None

    @classmethod
    def console(cls, argv: tuple[str, ...] | list[str] | None = None, **collaborators: Any) -> "AmbientContext":
        """Return a console context; ``argv`` defaults to ``sys.argv``."""

        request = ConsoleRequest.from_process() if argv is None else ConsoleRequest(argv=tuple(argv))
        return cls(request=request, **collaborators)

    @classmethod
    def web(cls, absolute_url: str, user_ip: str | None = None, **collaborators: Any) -> "AmbientContext":
        """Return a web context for ``absolute_url``."""

        return cls(request=WebRequest(absolute_url=absolute_url, user_ip=user_ip), **collaborators)

    def replace(self, **changes: Any) -> "AmbientContext":
        """Return a copied context with ``changes`` applied."""

        return replace(self, **changes)


class AmbientContextBinder:
    """Manage :class:`AmbientContext` instances bound to the current execution flow."""

    _stack_var: contextvars.ContextVar[tuple[AmbientContext, ...]]

    def __init__(self, name: str = "lib_log_message_ambient_context") -> None:
        self._stack_var = contextvars.ContextVar(name, default=())

    @contextmanager
    def bind(self, context: AmbientContext) -> Iterator[AmbientContext]:
        """Bind ``context`` for the duration of the ``with`` block."""

        if not isinstance(context, AmbientContext):
            raise TypeError(f"expected AmbientContext, got {type(context).__name__}")
        token = self._stack_var.set(self._stack_var.get() + (context,))
        try:
            yield context
        finally:
            self._stack_var.reset(token)

    def current(self) -> AmbientContext | None:
        """Return the context bound to the current scope, if any."""

        stack = self._stack_var.get()
        return stack[-1] if stack else None

    def clear(self) -> None:
        """Remove all bound contexts."""

        self._stack_var.set(())


__all__ = ["AmbientContext", "AmbientContextBinder", "ConsoleRequest", "WebRequest"]
