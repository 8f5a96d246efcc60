"""Rich-powered console adapter implementing :class:`ConsolePort`.

Purpose
-------
Print log messages to a terminal with per-level colours.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleAdapter` - adapter used by the ``render`` CLI command.
"""

from __future__ import annotations

from typing import Mapping, MutableMapping

from rich.console import Console

from lib_log_message.adapters._formatting import build_format_payload, template_fields
from lib_log_message.application.ports.console import ConsolePort
from lib_log_message.domain.levels import LogLevel
from lib_log_message.message import LogMessage

DEFAULT_CONSOLE_TEMPLATE = "{timestamp} {level_icon} {LEVEL:>8} {prefix}[{category}] {text}"

_STYLE_MAP: Mapping[LogLevel, str] = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
    LogLevel.CRITICAL: "bold red",
}

#: Default Rich styles keyed by :class:`LogLevel` severity.


class RichConsoleAdapter(ConsolePort):
    """Render log messages using Rich formatting with style overrides."""

    def __init__(
        self,
        *,
        console: Console | None = None,
        force_color: bool = False,
        no_color: bool = False,
        styles: MutableMapping[LogLevel | str, str] | None = None,
        template: str = DEFAULT_CONSOLE_TEMPLATE,
        not_available: str = "-",
    ) -> None:
        """Configure the console adapter with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color)
        self._no_color = no_color
        self._template = template
        self._inline_trace = "stack_trace" in template_fields(template)
        self._not_available = not_available
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = LogLevel.from_name(key) if isinstance(key, str) else key
            merged[level] = value
        self._style_map = merged

    def emit(self, message: LogMessage, *, colorize: bool) -> None:
        """Print ``message`` using Rich with optional colour.

        Examples
        --------
        >>> from io import StringIO
        >>> from lib_log_message.domain.record import RawLogRecord
        >>> console = Console(file=StringIO(), record=True)
        >>> adapter = RichConsoleAdapter(console=console)
        >>> adapter.emit(LogMessage(RawLogRecord("msg", 20, "app", 0.0)), colorize=False)
        >>> 'msg' in console.export_text()
        True
        """
        style = ""
        if colorize and not self._no_color:
            try:
                style = self._style_map.get(LogLevel.from_numeric(message.record.level), "")
            except ValueError:
                style = ""
        line = self.format_line(message)
        self._console.print(line, style=style, highlight=False, markup=False)

    def format_line(self, message: LogMessage) -> str:
        """Return the console line for ``message``.

        Trace lines are appended unless the template places ``{stack_trace}``.
        """

        line = self._template.format_map(build_format_payload(message, not_available=self._not_available))
        trace = message.stack_trace
        if trace and not self._inline_trace:
            line += "\n" + "\n".join(f"    {entry}" for entry in trace.splitlines())
        return line


__all__ = ["DEFAULT_CONSOLE_TEMPLATE", "RichConsoleAdapter"]
