"""
Session component - owns the signed-in identity.

The manager holds the only authoritative copy of "who is signed in" on the
client. It is seeded once from the auth store, then kept current by a single
store listener, and fans changes out to its own subscribers.

Invariants:
- At most one store subscription per manager, released exactly once
- current_user() never performs I/O
- Sign-up never sets an identity (the account needs email verification)
- Sign-out clears the identity even when the remote call fails
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from stackscroll.domain.entities import AuthEvent, Session, User
from stackscroll.domain.errors import (
    AuthRejected,
    StackScrollError,
    ValidationError,
    classify_auth_rejection,
)

from .models import (
    EMAIL_NOT_CONFIRMED,
    GENERIC_AUTH_FAILURE,
    INVALID_CREDENTIALS,
    PASSWORD_TOO_SHORT,
    SIGNUP_REJECTED,
    VERIFICATION_PENDING,
    AuthOutput,
)
from .ports import AuthStorePort, Subscription

logger = logging.getLogger(__name__)

UserListener = Callable[[User | None], None]

DEFAULT_MIN_PASSWORD_LENGTH = 6


def validate_password(password: str, min_length: int = DEFAULT_MIN_PASSWORD_LENGTH) -> str | None:
    """Return an error message if the password is too short, else None."""
    if len(password) < min_length:
        return PASSWORD_TOO_SHORT.format(min_length=min_length)
    return None


def sign_in_message(error: StackScrollError) -> str:
    """User-facing text for a failed sign-in. Never echoes the raw store message."""
    if isinstance(error, AuthRejected):
        reason = error.reason
        if reason != "email_not_confirmed":
            reason = classify_auth_rejection(error.message, error.error_code)
        if reason == "email_not_confirmed":
            return EMAIL_NOT_CONFIRMED
        return INVALID_CREDENTIALS
    if isinstance(error, ValidationError):
        return error.message
    return GENERIC_AUTH_FAILURE


class _ListenerHandle:
    def __init__(self, manager: SessionManager, callback: UserListener) -> None:
        self._manager = manager
        self._callback = callback

    def unsubscribe(self) -> None:
        self._manager._remove_listener(self._callback)


class SessionManager:
    def __init__(
        self,
        store: AuthStorePort,
        min_password_length: int = DEFAULT_MIN_PASSWORD_LENGTH,
    ) -> None:
        self.store = store
        self.min_password_length = min_password_length
        self._user: User | None = None
        self._listeners: list[UserListener] = []
        self._store_subscription: Subscription | None = None
        self._ready = False
        self._disposed = False

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def initialize(self) -> None:
        if self._ready or self._disposed:
            return

        session: Session | None = None
        try:
            session = await self.store.get_current_session()
        except StackScrollError as e:
            logger.warning(f"Could not restore session: {e.message}")

        # dispose() may have run while the restore was in flight.
        if self._disposed:
            return

        self._set_user(session.user if session else None)
        self._store_subscription = self.store.on_session_change(self._on_auth_event)
        self._ready = True
        state = "signed in" if self._user else "anonymous"
        logger.info(f"Session initialized ({state})")

    def current_user(self) -> User | None:
        return self._user

    def subscribe(self, callback: UserListener) -> Subscription:
        self._listeners.append(callback)
        return _ListenerHandle(self, callback)

    async def sign_in(self, email: str, password: str) -> AuthOutput:
        try:
            session = await self.store.sign_in_with_password(email, password)
        except StackScrollError as e:
            logger.warning(f"Sign-in failed for {email}: {e.message}")
            return AuthOutput(status="failed", error=e, message=sign_in_message(e))

        self._set_user(session.user)
        return AuthOutput(status="signed_in", user=session.user)

    async def sign_up(self, email: str, password: str) -> AuthOutput:
        password_error = validate_password(password, self.min_password_length)
        if password_error:
            error = ValidationError(password_error, field_name="password")
            return AuthOutput(status="failed", error=error, message=password_error)

        try:
            await self.store.sign_up(email, password)
        except AuthRejected as e:
            logger.warning(f"Sign-up rejected for {email}: {e.message}")
            return AuthOutput(status="failed", error=e, message=SIGNUP_REJECTED)
        except StackScrollError as e:
            logger.error(f"Sign-up failed for {email}: {e.message}")
            return AuthOutput(status="failed", error=e, message=GENERIC_AUTH_FAILURE)

        return AuthOutput(status="verification_pending", message=VERIFICATION_PENDING)

    async def sign_out(self) -> AuthOutput:
        error: StackScrollError | None = None
        try:
            await self.store.sign_out()
        except StackScrollError as e:
            # Local identity is cleared regardless.
            logger.error(f"Remote sign-out failed: {e.message}")
            error = e

        self._set_user(None)
        if error:
            return AuthOutput(status="signed_out", error=error, message=GENERIC_AUTH_FAILURE)
        return AuthOutput(status="signed_out")

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._store_subscription is not None:
            self._store_subscription.unsubscribe()
            self._store_subscription = None
        self._listeners.clear()

    # --- Internals ---

    def _on_auth_event(self, event: AuthEvent, session: Session | None) -> None:
        if self._disposed:
            return
        logger.info(f"Auth event: {event}")
        self._set_user(session.user if session else None)

    def _set_user(self, user: User | None) -> None:
        changed = user != self._user
        self._user = user
        if not changed:
            return
        for listener in list(self._listeners):
            listener(user)

    def _remove_listener(self, callback: UserListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
