from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.pretty import pretty_repr

from lib_log_message.adapters.ambient import StaticIdentity, StaticSession, StaticUser
from lib_log_message.adapters.console.rich_console import RichConsoleAdapter
from lib_log_message.adapters.target import PrefixTarget
from lib_log_message.application.ports import (
    ConsolePort,
    DebugFormatter,
    IdentityPort,
    LevelNameResolver,
    LogTargetPort,
    SessionPort,
    UserPort,
)
from lib_log_message.domain.levels import level_name
from lib_log_message.domain.record import RawLogRecord


class _NoPrefix:
    def render(self, record: RawLogRecord) -> str:
        return ""


def test_adapters_satisfy_ports() -> None:
    assert isinstance(PrefixTarget(), LogTargetPort)
    assert isinstance(RichConsoleAdapter(console=Console(file=StringIO())), ConsolePort)
    assert isinstance(StaticSession("abc"), SessionPort)
    assert isinstance(StaticIdentity(1), IdentityPort)
    assert isinstance(StaticUser(), UserPort)


def test_default_callables_satisfy_formatting_ports() -> None:
    assert isinstance(level_name, LevelNameResolver)
    assert isinstance(pretty_repr, DebugFormatter)


def test_objects_without_compute_prefix_are_not_targets() -> None:
    assert not isinstance(_NoPrefix(), LogTargetPort)
    assert not isinstance(object(), LogTargetPort)


def test_user_port_returns_identity() -> None:
    user = StaticUser(StaticIdentity("u-1"))
    identity = user.get_identity(auto_renew=False)
    assert identity is not None
    assert identity.id == "u-1"
    assert StaticUser().get_identity() is None
