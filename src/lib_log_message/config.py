"""Environment-driven configuration for formatters and the CLI.

Purpose
-------
Resolve formatter settings from explicit arguments, environment variables,
and optionally a nearby ``.env`` file.

Contents
--------
* :data:`DOTENV_ENV_VAR` - toggle that enables ``.env`` loading.
* :func:`should_use_dotenv` / :func:`enable_dotenv` - ``.env`` handling via
  ``python-dotenv``.
* :class:`MessageSettings` / :func:`load_settings` - resolved formatter
  settings.

Precedence is: explicit argument, then environment variable, then default.
Values loaded from ``.env`` never override variables that are already set.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .adapters.formatter import DEFAULT_TEMPLATE

DOTENV_ENV_VAR = "LIB_LOG_MESSAGE_USE_DOTENV"

ENV_TEMPLATE = "LOG_MESSAGE_TEMPLATE"
ENV_TRACE_LEVEL = "LOG_MESSAGE_TRACE_LEVEL"
ENV_NOT_AVAILABLE = "LOG_MESSAGE_NOT_AVAILABLE"
ENV_FORCE_COLOR = "LOG_MESSAGE_FORCE_COLOR"
ENV_NO_COLOR = "LOG_MESSAGE_NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}

_LOGGER = logging.getLogger(__name__)

_dotenv_loaded = False
_dotenv_path: Path | None = None


def _env_bool(name: str, default: bool) -> bool:
    """Return the boolean value of an environment variable with fallback.

    Examples
    --------
    >>> import os
    >>> _ = os.environ.pop('LOG_EXAMPLE_BOOL', None)
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    True
    >>> os.environ['LOG_EXAMPLE_BOOL'] = '0'
    >>> _env_bool('LOG_EXAMPLE_BOOL', default=True)
    False
    """
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def should_use_dotenv(*, explicit: bool | None, env_value: str | None) -> bool:
    """Decide whether ``.env`` loading is enabled; an explicit flag wins.

    Examples
    --------
    >>> should_use_dotenv(explicit=None, env_value="yes")
    True
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def _find_dotenv(start: Path) -> Path | None:
    # find_dotenv only searches from the cwd or the calling module, not from an arbitrary directory.
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` upward from ``search_from`` (default: cwd).

    Returns the loaded file, or ``None`` when none was found. Runs at most
    once per process; later calls return the first result.
    """

    global _dotenv_loaded, _dotenv_path

    if _dotenv_loaded:
        return _dotenv_path

    if search_from is None:
        start = Path.cwd().resolve()
        found = find_dotenv(usecwd=True)
        candidate = Path(found).resolve() if found else None
    else:
        start = search_from.resolve()
        candidate = _find_dotenv(start)
    if candidate is not None:
        load_dotenv(candidate, override=False)
        _LOGGER.debug("loaded environment defaults from %s", candidate)
    else:
        _LOGGER.debug("no .env file found above %s", start)

    _dotenv_loaded = True
    _dotenv_path = candidate
    return candidate


def _reset_dotenv_state_for_testing() -> None:
    global _dotenv_loaded, _dotenv_path
    _dotenv_loaded = False
    _dotenv_path = None


@dataclass(slots=True, frozen=True)
class MessageSettings:
    """Resolved settings for :class:`~lib_log_message.adapters.MessageFormatter`
    and the console adapter."""

    template: str = DEFAULT_TEMPLATE
    trace_level: int = 0
    not_available: str = "-"
    force_color: bool = False
    no_color: bool = False

    def __post_init__(self) -> None:
        if not self.template.strip():
            raise ValueError("template must not be empty")
        if self.trace_level < 0:
            raise ValueError(f"trace_level must be >= 0, got {self.trace_level}")


def _coerce_trace_level(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{ENV_TRACE_LEVEL} must be an integer, got {value!r}") from exc


def load_settings(
    *,
    template: str | None = None,
    trace_level: int | None = None,
    not_available: str | None = None,
    force_color: bool | None = None,
    no_color: bool | None = None,
) -> MessageSettings:
    """Return :class:`MessageSettings` from explicit values and the environment.

    Examples
    --------
    >>> load_settings(template="{text}", trace_level=2).trace_level
    2
    """

    if trace_level is None:
        trace_level = _coerce_trace_level(os.getenv(ENV_TRACE_LEVEL))
    return MessageSettings(
        template=template or os.getenv(ENV_TEMPLATE) or DEFAULT_TEMPLATE,
        trace_level=0 if trace_level is None else trace_level,
        not_available=not_available if not_available is not None else os.getenv(ENV_NOT_AVAILABLE, "-"),
        force_color=force_color if force_color is not None else _env_bool(ENV_FORCE_COLOR, False),
        no_color=no_color if no_color is not None else _env_bool(ENV_NO_COLOR, False),
    )


__all__ = [
    "DOTENV_ENV_VAR",
    "ENV_FORCE_COLOR",
    "ENV_NOT_AVAILABLE",
    "ENV_NO_COLOR",
    "ENV_TEMPLATE",
    "ENV_TRACE_LEVEL",
    "MessageSettings",
    "enable_dotenv",
    "load_settings",
    "should_use_dotenv",
]
