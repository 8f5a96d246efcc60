"""Console port describing terminal emission contracts.

Purpose
-------
Define the abstraction for adapters that print log messages to interactive
consoles, letting the CLI depend on a narrow protocol.

Contents
--------
* :class:`ConsolePort` – runtime-checkable protocol with a single ``emit``
  method supporting optional colour control.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from lib_log_message.message import LogMessage


@runtime_checkable
class ConsolePort(Protocol):
    """Render a log message to an interactive console."""

    def emit(self, message: "LogMessage", *, colorize: bool) -> None:
        """Render ``message`` with optional colour control."""


__all__ = ["ConsolePort"]
