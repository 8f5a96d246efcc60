"""Static package metadata shown by ``lib_log_message info``."""

from __future__ import annotations

import sys
from typing import Callable

name = "lib_log_message"
title = "Request-aware log message view for Python logging"
version = "0.1.0"
shell_command = "lib_log_message"


def print_info(writer: Callable[[str], object] | None = None) -> None:
    """Write the metadata banner, one newline-terminated line per call.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_message:\\n'
    """

    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("shell_command", shell_command),
    )
    writer = writer or sys.stdout.write
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n")
    writer("\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
