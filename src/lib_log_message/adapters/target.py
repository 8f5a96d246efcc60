"""Default :class:`LogTargetPort` implementation.

Purpose
-------
Produce the ``[ip][user id][session id]`` prefix that log files traditionally
carry, or delegate to a caller-supplied callable.

Contents
--------
* :class:`PrefixTarget` - prefix computation from the ambient context.
"""

from __future__ import annotations

from typing import Callable

from lib_log_message.application.ports import LogTargetPort
from lib_log_message.domain.context import AmbientContext, WebRequest
from lib_log_message.domain.record import RawLogRecord

MISSING = "-"


class PrefixTarget(LogTargetPort):
    """Compute message prefixes from the request context.

    Parameters
    ----------
    context_provider:
        Zero-argument callable returning the current :class:`AmbientContext`
        (or ``None`` outside any application).
    prefix:
        Optional callable overriding the default prefix entirely.

    Examples
    --------
    >>> from lib_log_message.adapters.ambient import StaticSession
    >>> ctx = AmbientContext.web("http://example.com/", "10.0.0.1", session=StaticSession("abc"))
    >>> PrefixTarget(lambda: ctx).compute_prefix(RawLogRecord("x", 20, "app", 0.0))
    '[10.0.0.1][-][abc]'
    """

    def __init__(
        self,
        context_provider: Callable[[], AmbientContext | None] | None = None,
        prefix: Callable[[RawLogRecord], str] | None = None,
    ) -> None:
        self._context_provider = context_provider or (lambda: None)
        self._prefix = prefix

    def compute_prefix(self, record: RawLogRecord) -> str:
        if self._prefix is not None:
            return self._prefix(record)

        context = self._context_provider()
        if context is None:
            return ""

        request = context.request
        ip = request.user_ip if isinstance(request, WebRequest) else None

        user_id = None
        if context.user is not None:
            identity = context.user.get_identity(auto_renew=False)
            if identity is not None:
                user_id = identity.id

        session_id = None
        if context.session is not None and context.session.is_active:
            session_id = context.session.id

        return "".join(f"[{MISSING if value is None else value}]" for value in (ip, user_id, session_id))


__all__ = ["PrefixTarget"]
