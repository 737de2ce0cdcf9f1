"""
Session component port definitions.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from stackscroll.domain.entities import AuthEvent, Session

SessionListener = Callable[[AuthEvent, Session | None], None]


class Subscription(Protocol):
    """Handle returned by a listener registration."""

    def unsubscribe(self) -> None:
        ...


class AuthStorePort(Protocol):
    """Port for the hosted auth service."""

    async def get_current_session(self) -> Session | None:
        """Return the persisted session, refreshing it if needed."""
        ...

    def on_session_change(self, callback: SessionListener) -> Subscription:
        """Register a listener for every later auth event."""
        ...

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        """Raises AuthRejected or RemoteFailure."""
        ...

    async def sign_up(self, email: str, password: str) -> Session | None:
        """Returns None when the account still needs email verification."""
        ...

    async def sign_out(self) -> None:
        ...
