"""Click command line interface for inspecting rendered log messages.

Purpose
-------
Let operators preview how a record renders under a given request context
(console, web, or none) without wiring a logging handler.

Contents
--------
* :func:`cli` - root group with ``--traceback`` and ``--use-dotenv`` toggles.
* ``info`` / ``render`` subcommands.
* :func:`main` - entry point wrapped by :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

import json
import logging
import os
import time
from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from .adapters import PrefixTarget, RichConsoleAdapter, StaticIdentity, StaticSession, StaticUser
from .domain import AmbientContext, ConsoleRequest, LogLevel, RawLogRecord
from .message import LogMessage

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_LOGGER = logging.getLogger(__name__)


def summary_info() -> str:
    """Return the metadata banner as a single string.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


def _coerce_user_id(value: str) -> int | str:
    return int(value) if value.isdigit() else value


def _build_context(
    kind: str,
    *,
    argv: tuple[str, ...],
    url: str,
    user_ip: str | None,
    session_id: str | None,
    user_id: str | None,
) -> AmbientContext | None:
    """Translate CLI flags into an :class:`AmbientContext`."""

    if kind == "none":
        return None
    session = StaticSession(session_id) if session_id else None
    user = StaticUser(StaticIdentity(_coerce_user_id(user_id)) if user_id else None)
    if kind == "console":
        request = ConsoleRequest(argv=argv) if argv else ConsoleRequest.from_process()
        return AmbientContext(request=request, session=session, user=user)
    return AmbientContext.web(url, user_ip, session=session, user=user)


@click.group(help=__init__conf__.title, context_settings=CLICK_CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show the full Python traceback when a command fails.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from a nearby .env (overrides {config_module.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool | None, use_dotenv: bool | None) -> None:
    """Root command; prints the metadata banner when no subcommand is given."""

    if config_module.should_use_dotenv(explicit=use_dotenv, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("text")
@click.option(
    "--level",
    type=click.Choice([level.severity for level in LogLevel], case_sensitive=False),
    default="info",
    show_default=True,
)
@click.option("--category", default="application", show_default=True)
@click.option("--timestamp", type=float, default=None, help="Seconds since the epoch (default: now).")
@click.option(
    "--context",
    "context_kind",
    type=click.Choice(["none", "console", "web"]),
    default="none",
    show_default=True,
    help="Ambient request the message is rendered in.",
)
@click.option("--argv", multiple=True, help="Console argument, repeatable (default: this process' arguments).")
@click.option("--url", default="http://localhost/", show_default=True, help="Absolute URL of a web request.")
@click.option("--user-ip", default=None, help="Remote address of a web request.")
@click.option("--session-id", default=None, help="Identifier of an active session.")
@click.option("--user-id", default=None, help="Identity of the logged-in user.")
@click.option("--template", default=None, help="str.format template (default: LOG_MESSAGE_TEMPLATE or built-in).")
@click.option("--json", "as_json", is_flag=True, help="Print every field as JSON instead of a line.")
@click.option("--color/--no-color", default=None, help="Force or disable colours.")
def cli_render(
    text: str,
    level: str,
    category: str,
    timestamp: float | None,
    context_kind: str,
    argv: tuple[str, ...],
    url: str,
    user_ip: str | None,
    session_id: str | None,
    user_id: str | None,
    template: str | None,
    as_json: bool,
    color: bool | None,
) -> None:
    """Render TEXT as a log message."""

    settings = config_module.load_settings(
        template=template,
        force_color=color if color else None,
        no_color=(not color) if color is not None else None,
    )
    context = _build_context(
        context_kind,
        argv=argv,
        url=url,
        user_ip=user_ip,
        session_id=session_id,
        user_id=user_id,
    )
    record = RawLogRecord(
        text=text,
        level=LogLevel.from_name(level),
        category=category,
        timestamp=time.time() if timestamp is None else timestamp,
    )
    message = LogMessage(record, PrefixTarget(lambda: context), context=context)
    _LOGGER.debug("rendering %s message in %s context", level, context_kind)

    if as_json:
        click.echo(json.dumps(message.to_dict(), sort_keys=True, default=str))
        return

    adapter = RichConsoleAdapter(
        force_color=settings.force_color,
        no_color=settings.no_color,
        template=settings.template,
        not_available=settings.not_available,
    )
    adapter.emit(message, colorize=not settings.no_color)


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards
    unless ``restore_traceback`` is ``False``.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main", "summary_info"]
