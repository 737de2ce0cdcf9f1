"""
Session component outcome models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from stackscroll.domain.entities import User
from stackscroll.domain.errors import StackScrollError

AuthStatus = Literal["signed_in", "verification_pending", "signed_out", "failed"]

PASSWORD_TOO_SHORT = "Password must be at least {min_length} characters long"
EMAIL_NOT_CONFIRMED = "Please check your email to verify your account before signing in."
INVALID_CREDENTIALS = (
    "Invalid email or password. Please try again or sign up for a new account."
)
VERIFICATION_PENDING = "Account created! Please check your email for verification."
SIGNUP_REJECTED = "Could not create the account. Please check your details and try again."
GENERIC_AUTH_FAILURE = "Something went wrong. Please try again."


@dataclass(frozen=True)
class AuthOutput:
    status: AuthStatus
    user: User | None = None
    error: StackScrollError | None = None
    message: str | None = None

    @property
    def success(self) -> bool:
        return self.status != "failed"
