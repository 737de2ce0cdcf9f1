"""
Authenticate component - Sign-in / sign-up screen view-model.

A thin adapter over the session component: it keeps the form state, the
mode toggle and the user-facing feedback.

Invariants:
- Switching mode clears error and success feedback
- Sign-up success never signs the user in; the screen returns to sign-in mode
- A submit while another is in flight is a no-op
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from stackscroll.components.session import SessionManager
from stackscroll.domain.errors import ValidationError

from .models import CREDENTIALS_REQUIRED, PASSWORD_HINT, AuthMode, AuthScreenOutput

logger = logging.getLogger(__name__)


class AuthScreenViewModel:
    def __init__(
        self,
        session: SessionManager,
        next_route: str = "compose",
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.session = session
        self.next_route = next_route
        self.on_change = on_change
        self.mode: AuthMode = "signin"
        self.email = ""
        self.password = ""
        self.error: str | None = None
        self.success_message: str | None = None
        self.processing = False

    # --- Labels ---

    @property
    def heading(self) -> str:
        if self.mode == "signin":
            return "Sign in to your account"
        return "Create a new account"

    @property
    def submit_label(self) -> str:
        if self.processing:
            return "Processing..."
        return "Sign in" if self.mode == "signin" else "Sign up"

    @property
    def switch_label(self) -> str:
        if self.mode == "signin":
            return "Don't have an account? Sign up"
        return "Already have an account? Sign in"

    @property
    def password_hint(self) -> str | None:
        if self.mode != "signup":
            return None
        return PASSWORD_HINT.format(min_length=self.session.min_password_length)

    # --- Actions ---

    def switch_mode(self) -> None:
        self.mode = "signup" if self.mode == "signin" else "signin"
        self.error = None
        self.success_message = None
        self._changed()

    async def submit(self) -> AuthScreenOutput:
        if self.processing:
            return AuthScreenOutput(success=False, skipped=True)

        self.error = None
        self.success_message = None

        if not self.email or not self.password:
            self.error = CREDENTIALS_REQUIRED
            self._changed()
            return AuthScreenOutput(
                success=False,
                error=ValidationError(CREDENTIALS_REQUIRED),
                message=CREDENTIALS_REQUIRED,
            )

        self.processing = True
        self._changed()
        try:
            if self.mode == "signin":
                return await self._sign_in()
            return await self._sign_up()
        finally:
            self.processing = False
            self._changed()

    async def _sign_in(self) -> AuthScreenOutput:
        out = await self.session.sign_in(self.email, self.password)
        if not out.success:
            self.error = out.message
            return AuthScreenOutput(success=False, error=out.error, message=out.message)

        logger.info(f"Signed in as {self.email}")
        self.password = ""
        return AuthScreenOutput(success=True, navigate_to=self.next_route)

    async def _sign_up(self) -> AuthScreenOutput:
        out = await self.session.sign_up(self.email, self.password)
        if not out.success:
            self.error = out.message
            return AuthScreenOutput(success=False, error=out.error, message=out.message)

        self.success_message = out.message
        self.mode = "signin"
        return AuthScreenOutput(success=True, message=out.message)

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
