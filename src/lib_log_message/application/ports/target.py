"""Log target port supplying the per-message prefix."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_message.domain.record import RawLogRecord


@runtime_checkable
class LogTargetPort(Protocol):
    """Destination that renders records and decides their prefix string."""

    def compute_prefix(self, record: RawLogRecord) -> str:
        """Return the string prepended to ``record`` when it is rendered."""


__all__ = ["LogTargetPort"]
