from __future__ import annotations

import traceback
from typing import Any

import pytest
from rich.pretty import pretty_repr

from lib_log_message.adapters.ambient import StaticIdentity, StaticSession, StaticUser
from lib_log_message.domain.context import AmbientContext, ConsoleRequest, WebRequest
from lib_log_message.domain.errors import ConfigurationError
from lib_log_message.domain.levels import LogLevel
from lib_log_message.domain.record import RawLogRecord, StackFrame
from lib_log_message.message import LogMessage

WEB_URL = "http://example.com/index.php?r=test"
WEB_IP = "0.0.0.0"
CONSOLE_ARGV = ("prog", "--flag")


class _ToggleSession:
    def __init__(self, session_id: str | None, *, active: bool) -> None:
        self._id = session_id
        self._active = active

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def id(self) -> str | None:
        return self._id


class _RecordingUser:
    def __init__(self, identity: Any) -> None:
        self.identity = identity
        self.calls: list[bool] = []

    def get_identity(self, auto_renew: bool = True) -> Any:
        self.calls.append(auto_renew)
        return self.identity


def _raised(error: BaseException) -> BaseException:
    try:
        raise error
    except BaseException as exc:
        return exc


TEXTS: dict[str, Any] = {
    "rendered-error": "".join(traceback.format_exception_only(ValueError, ValueError("Hello & <world> 🌊"))),
    "list": ["bar"],
    "error": _raised(RuntimeError("baz")),
    "string": "foobar",
}

CONTEXTS: dict[str, AmbientContext | None] = {
    "console": AmbientContext(request=ConsoleRequest(argv=CONSOLE_ARGV)),
    "web": AmbientContext(
        request=WebRequest(absolute_url=WEB_URL, user_ip=WEB_IP),
        session=StaticSession("session_id"),
        user=StaticUser(StaticIdentity("userId")),
    ),
    "none": None,
}

SETS = [pytest.param(text, context, id=f"{text_name}:{context_name}") for text_name, text in TEXTS.items() for context_name, context in CONTEXTS.items()]


def _record(text: Any = "hello", level: int = LogLevel.INFO.value, **overrides: Any) -> RawLogRecord:
    fields: dict[str, Any] = {"text": text, "level": level, "category": "app", "timestamp": 1000.0}
    fields.update(overrides)
    return RawLogRecord(**fields)


@pytest.mark.parametrize("text, context", SETS)
def test_category_is_returned_unchanged(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text, category="tests.message"), context=context)
    assert message.category == "tests.message"


@pytest.mark.parametrize("text, context", SETS)
def test_timestamp_is_returned_unchanged(text: Any, context: AmbientContext | None) -> None:
    assert LogMessage(_record(text, timestamp=1234.5), context=context).timestamp == 1234.5


@pytest.mark.parametrize("text, context", SETS)
def test_text_renders_by_variant(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if isinstance(text, str):
        assert message.text == text
    elif isinstance(text, BaseException):
        assert message.text == "".join(traceback.format_exception(type(text), text, text.__traceback__)).rstrip("\n")
    else:
        assert message.text == pretty_repr(text)


def test_error_text_includes_type_message_and_trace() -> None:
    error = _raised(RuntimeError("baz"))
    text = LogMessage(_record(error)).text
    assert text.startswith("Traceback (most recent call last):")
    assert text.endswith("RuntimeError: baz")
    assert "_raised" in text


def test_value_text_is_deterministic() -> None:
    first = LogMessage(_record({"b": [1, 2], "a": ("x",)})).text
    second = LogMessage(_record({"b": [1, 2], "a": ("x",)})).text
    assert first == second
    assert "'b'" in first


def test_custom_debug_formatter_is_used_for_values() -> None:
    message = LogMessage(_record(["bar"]), debug_formatter=lambda value: f"<{value!r}>")
    assert message.text == "<['bar']>"


@pytest.mark.parametrize("level", LogLevel)
def test_level_uses_level_name_mapping(level: LogLevel) -> None:
    assert LogMessage(_record(level=level.value)).level == level.severity


def test_level_accepts_custom_resolver() -> None:
    message = LogMessage(_record(level=4), level_names=lambda code: {4: "info"}.get(code, "unknown"))
    assert message.level == "info"


@pytest.mark.parametrize("text, context", SETS)
def test_stack_trace_is_not_available_without_frames(text: Any, context: AmbientContext | None) -> None:
    assert LogMessage(_record(text), context=context).stack_trace is None


def test_stack_trace_lists_frames_in_order() -> None:
    frames = [StackFrame("/srv/app/a.py", 10), {"file": "/srv/app/b.py", "line": 20}]
    message = LogMessage(_record(stack_frames=frames))
    assert message.stack_trace == "in /srv/app/a.py:10\nin /srv/app/b.py:20"


def test_prefix_is_empty_without_target() -> None:
    assert LogMessage(_record()).prefix == ""


@pytest.mark.parametrize("text, context", SETS)
def test_prefix_delegates_to_target(text: Any, context: AmbientContext | None, recording_target) -> None:
    record = _record(text)
    message = LogMessage(record, recording_target, context=context)
    assert message.target is recording_target
    assert message.prefix == "foo"
    assert recording_target.records == [record]


def test_constructor_rejects_target_without_compute_prefix() -> None:
    with pytest.raises(ConfigurationError, match="should implement `LogTargetPort`"):
        LogMessage(_record(), object())


def test_constructor_accepts_positional_sequence() -> None:
    message = LogMessage(["hello", LogLevel.INFO.value, "app", 1000.0])
    assert message.record == RawLogRecord("hello", 20, "app", 1000.0)


@pytest.mark.parametrize("record", ["hello", 42, None])
def test_constructor_rejects_non_records(record: Any) -> None:
    with pytest.raises(TypeError):
        LogMessage(record)


@pytest.mark.parametrize("context_name, expected", [("console", True), ("web", False)])
def test_is_console_request_detects_request_kind(context_name: str, expected: bool) -> None:
    assert LogMessage(_record(), context=CONTEXTS[context_name]).is_console_request is expected


def test_is_console_request_without_context_raises() -> None:
    with pytest.raises(ConfigurationError, match="Unable to determine if the application is a console or web application."):
        LogMessage(_record()).is_console_request


def test_is_console_request_without_request_raises() -> None:
    message = LogMessage(_record(), context=AmbientContext(session=StaticSession("abc")))
    with pytest.raises(ConfigurationError):
        message.is_console_request
    with pytest.raises(ConfigurationError):
        message.command_line


def test_is_console_request_is_memoized() -> None:
    class _Context:
        def __init__(self) -> None:
            self.reads = 0

        @property
        def request(self) -> ConsoleRequest:
            self.reads += 1
            return ConsoleRequest(argv=("prog",))

    context = _Context()
    message = LogMessage(_record(), context=context)  # type: ignore[arg-type]
    assert message.is_console_request is True
    assert message.is_console_request is True
    assert message.url is None
    assert context.reads == 1


@pytest.mark.parametrize("text, context", SETS)
def test_command_line(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if context is CONTEXTS["console"]:
        assert message.command_line == "prog --flag"
    else:
        assert message.command_line is None


def test_command_line_is_empty_when_argv_unavailable() -> None:
    message = LogMessage(_record(), context=AmbientContext(request=ConsoleRequest(argv=None)))
    assert message.command_line == ""


@pytest.mark.parametrize("text, context", SETS)
def test_session_id(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if context is CONTEXTS["web"]:
        assert message.session_id == "session_id"
    else:
        assert message.session_id is None


def test_session_id_requires_active_session() -> None:
    context = AmbientContext.web(WEB_URL, WEB_IP, session=_ToggleSession("abc123", active=False))
    assert LogMessage(_record(), context=context).session_id is None


@pytest.mark.parametrize("text, context", SETS)
def test_url(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if context is CONTEXTS["web"]:
        assert message.url == WEB_URL
    else:
        assert message.url is None


@pytest.mark.parametrize("text, context", SETS)
def test_user_id(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if context is CONTEXTS["web"]:
        assert message.user_id == "userId"
    else:
        assert message.user_id is None


def test_user_id_does_not_renew_identity() -> None:
    user = _RecordingUser(StaticIdentity(7))
    assert LogMessage(_record(), context=AmbientContext.web(WEB_URL, user=user)).user_id == 7
    assert user.calls == [False]


def test_user_id_is_not_available_for_guests() -> None:
    context = AmbientContext.web(WEB_URL, user=_RecordingUser(None))
    assert LogMessage(_record(), context=context).user_id is None


@pytest.mark.parametrize("text, context", SETS)
def test_user_ip(text: Any, context: AmbientContext | None) -> None:
    message = LogMessage(_record(text), context=context)
    if context is CONTEXTS["web"]:
        assert message.user_ip == WEB_IP
    else:
        assert message.user_ip is None


def test_scenario_without_application() -> None:
    message = LogMessage(RawLogRecord("hello", LogLevel.INFO, "app", 1000.0))
    assert message.text == "hello"
    assert message.level == "info"
    assert message.category == "app"
    assert message.timestamp == 1000.0
    assert message.prefix == ""
    assert message.stack_trace is None


def test_scenario_console_application() -> None:
    context = AmbientContext.console(["prog", "--flag"])
    message = LogMessage(RawLogRecord("hello", LogLevel.INFO, "app", 1000.0), context=context)
    assert message.command_line == "prog --flag"
    assert message.url is None
    assert message.user_ip is None


def test_scenario_web_application() -> None:
    context = AmbientContext.web(
        "http://example.com/",
        "10.0.0.1",
        session=StaticSession("abc123"),
        user=StaticUser(StaticIdentity(42)),
    )
    message = LogMessage(RawLogRecord("hello", LogLevel.INFO, "app", 1000.0), context=context)
    assert message.session_id == "abc123"
    assert message.user_id == 42


def test_to_dict_without_context_leaves_request_fields_empty() -> None:
    data = LogMessage(_record()).to_dict()
    assert data["text"] == "hello"
    assert data["is_console_request"] is None
    assert data["url"] is None
    assert data["command_line"] is None


def test_to_dict_in_web_context() -> None:
    data = LogMessage(_record(), context=CONTEXTS["web"]).to_dict()
    assert data["is_console_request"] is False
    assert data["url"] == WEB_URL
    assert data["user_ip"] == WEB_IP
    assert data["session_id"] == "session_id"
    assert data["user_id"] == "userId"


def test_accessors_do_not_mutate_record() -> None:
    record = _record(["bar"], stack_frames=[StackFrame("/srv/a.py", 1)])
    snapshot = RawLogRecord(record.text, record.level, record.category, record.timestamp, record.stack_frames)
    message = LogMessage(record, context=CONTEXTS["web"])
    message.to_dict()
    assert message.record == snapshot
