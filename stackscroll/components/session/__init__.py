"""
Session component - Signed-in identity and its propagation.

Handles sign-in, sign-up, sign-out and session-change fan-out.
"""

from .component import (
    DEFAULT_MIN_PASSWORD_LENGTH,
    SessionManager,
    sign_in_message,
    validate_password,
)
from .models import (
    EMAIL_NOT_CONFIRMED,
    GENERIC_AUTH_FAILURE,
    INVALID_CREDENTIALS,
    PASSWORD_TOO_SHORT,
    SIGNUP_REJECTED,
    VERIFICATION_PENDING,
    AuthOutput,
    AuthStatus,
)
from .ports import AuthStorePort, SessionListener, Subscription

__all__ = [
    # Component
    "SessionManager",
    "sign_in_message",
    "validate_password",
    "DEFAULT_MIN_PASSWORD_LENGTH",
    # Messages
    "EMAIL_NOT_CONFIRMED",
    "GENERIC_AUTH_FAILURE",
    "INVALID_CREDENTIALS",
    "PASSWORD_TOO_SHORT",
    "SIGNUP_REJECTED",
    "VERIFICATION_PENDING",
    # Models
    "AuthOutput",
    "AuthStatus",
    # Ports
    "AuthStorePort",
    "SessionListener",
    "Subscription",
]
