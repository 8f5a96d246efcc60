"""In-memory session, user, and identity collaborators.

Used by the CLI to describe a request from command-line flags and by hosts
whose session/user state is already resolved before logging starts.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class StaticSession:
    """Session with a fixed identifier."""

    id: str | None
    is_active: bool = True


@dataclass(slots=True, frozen=True)
class StaticIdentity:
    """Identity with a fixed primary key."""

    id: int | str


@dataclass(slots=True, frozen=True)
class StaticUser:
    """User component returning a pre-resolved identity, or none for guests."""

    identity: StaticIdentity | None = None

    def get_identity(self, auto_renew: bool = True) -> StaticIdentity | None:
        return self.identity


__all__ = ["StaticIdentity", "StaticSession", "StaticUser"]
