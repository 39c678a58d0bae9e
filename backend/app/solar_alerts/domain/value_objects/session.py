"""Viewer session variants used to route alert-settings storage."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AuthenticatedSession:
    """A signed-in viewer backed by a persistent subscriber record."""

    user_id: str

    @property
    def key(self) -> str:
        return f"user:{self.user_id}"


@dataclass(frozen=True)
class DemoSession:
    """The shared demo account; settings live in an ephemeral store."""

    @property
    def key(self) -> str:
        return "demo"


@dataclass(frozen=True)
class AnonymousSession:
    """A viewer who is not signed in; settings are read-only defaults."""

    @property
    def key(self) -> str:
        return "anonymous"


ViewerSession = Union[AuthenticatedSession, DemoSession, AnonymousSession]
