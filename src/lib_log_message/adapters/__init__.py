"""Adapters rendering log messages and supplying their collaborators."""

from __future__ import annotations

from ._formatting import build_format_payload
from .ambient import StaticIdentity, StaticSession, StaticUser
from .console.rich_console import RichConsoleAdapter
from .formatter import AMBIENT_CONTEXT, DEFAULT_TEMPLATE, CallSiteFilter, MessageFormatter
from .target import PrefixTarget

__all__ = [
    "AMBIENT_CONTEXT",
    "CallSiteFilter",
    "DEFAULT_TEMPLATE",
    "MessageFormatter",
    "PrefixTarget",
    "RichConsoleAdapter",
    "StaticIdentity",
    "StaticSession",
    "StaticUser",
    "build_format_payload",
]
