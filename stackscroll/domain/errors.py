"""
Error kinds raised by adapters and caught at the component boundary.

Components convert these into outcome objects with a short user-facing
message; the raw detail is only ever logged.
"""

from __future__ import annotations

from typing import Literal

AuthRejectReason = Literal["email_not_confirmed", "invalid_credentials", "signup_rejected"]


class StackScrollError(Exception):
    """Base class for all application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StackScrollError):
    """Input rejected locally, before any remote call."""

    def __init__(self, message: str, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


class AuthRejected(StackScrollError):
    """The auth service refused the credentials or the sign-up."""

    def __init__(
        self,
        message: str,
        reason: AuthRejectReason = "invalid_credentials",
        error_code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.error_code = error_code


class RemoteFailure(StackScrollError):
    """Any other store failure: transport, server error, malformed payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthorizationDenied(StackScrollError):
    """A mutation was attempted by someone who does not own the resource."""


def classify_auth_rejection(message: str, error_code: str | None = None) -> AuthRejectReason:
    """Tell an unconfirmed-email refusal apart from every other sign-in refusal."""
    if error_code == "email_not_confirmed" or "email not confirmed" in message.lower():
        return "email_not_confirmed"
    return "invalid_credentials"
