"""Ports for the session and user collaborators of an ambient context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionPort(Protocol):
    """Session component of the running application."""

    @property
    def is_active(self) -> bool:
        """Return whether the session has been started."""

    @property
    def id(self) -> str | None:
        """Return the session identifier."""


@runtime_checkable
class IdentityPort(Protocol):
    """Authenticated identity resolved by a :class:`UserPort`."""

    @property
    def id(self) -> int | str:
        """Return the identity's primary key."""


@runtime_checkable
class UserPort(Protocol):
    """User component able to resolve the current identity."""

    def get_identity(self, auto_renew: bool = True) -> IdentityPort | None:
        """Return the current identity; ``auto_renew=False`` must not touch storage."""


__all__ = ["IdentityPort", "SessionPort", "UserPort"]
