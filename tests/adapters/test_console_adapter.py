from __future__ import annotations

import pytest

from lib_log_message.adapters.console.rich_console import RichConsoleAdapter
from lib_log_message.domain.context import AmbientContext
from lib_log_message.domain.levels import LogLevel
from lib_log_message.domain.record import RawLogRecord, StackFrame
from lib_log_message.message import LogMessage


def _message(**overrides) -> LogMessage:
    fields = {"text": "hello", "level": LogLevel.INFO, "category": "tests", "timestamp": 0.0}
    fields.update(overrides)
    return LogMessage(RawLogRecord(**fields))


def test_rich_console_adapter_renders_expected_line(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_message(), colorize=True)
    output = record_console.export_text()
    assert "INFO" in output
    assert "[tests]" in output
    assert "hello" in output
    assert "1970-01-01T00:00:00+00:00" in output


def test_rich_console_adapter_prints_text_literally(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console, no_color=True)
    adapter.emit(_message(text="[bold]not markup[/bold]"), colorize=True)
    assert "[bold]not markup[/bold]" in record_console.export_text()


@pytest.mark.parametrize("colorize", [True, False])
def test_rich_console_adapter_allows_color_flag(record_console, colorize: bool) -> None:
    adapter = RichConsoleAdapter(console=record_console)
    adapter.emit(_message(level=LogLevel.ERROR), colorize=colorize)
    assert "ERROR" in record_console.export_text()


def test_rich_console_adapter_uses_custom_template(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console, template="{level}|{url}|{text}", not_available="n/a")
    adapter.emit(_message(), colorize=False)
    assert record_console.export_text().strip() == "info|n/a|hello"


def test_format_line_appends_stack_trace() -> None:
    adapter = RichConsoleAdapter(template="{text}")
    line = adapter.format_line(_message(stack_frames=[StackFrame("/srv/a.py", 1), StackFrame("/srv/b.py", 2)]))
    assert line == "hello\n    in /srv/a.py:1\n    in /srv/b.py:2"


def test_format_line_does_not_repeat_inline_stack_trace() -> None:
    adapter = RichConsoleAdapter(template="{text} | {stack_trace}")
    line = adapter.format_line(_message(stack_frames=[StackFrame("/srv/a.py", 1)]))
    assert line == "hello | in /srv/a.py:1"


def test_format_line_renders_web_fields() -> None:
    context = AmbientContext.web("http://example.com/x", "10.1.1.1")
    message = LogMessage(RawLogRecord("hello", 20, "app", 0.0), context=context)
    adapter = RichConsoleAdapter(template="{url} {user_ip} {command_line}")
    assert adapter.format_line(message) == "http://example.com/x 10.1.1.1 -"


def test_style_overrides_accept_level_names(record_console) -> None:
    adapter = RichConsoleAdapter(console=record_console, styles={"info": "green"})
    adapter.emit(_message(), colorize=True)
    assert "hello" in record_console.export_text()
