"""Exceptions raised by the log message view."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Raised when the view is wired with collaborators it cannot use.

    Two situations trigger it: a target that does not implement
    :class:`~lib_log_message.application.ports.LogTargetPort`, and asking
    whether the current request is a console request when the ambient context
    cannot tell.
    """


__all__ = ["ConfigurationError"]
