"""
Authenticate component - Sign-in / sign-up form state and feedback.
"""

from .component import AuthScreenViewModel
from .models import CREDENTIALS_REQUIRED, PASSWORD_HINT, AuthMode, AuthScreenOutput

__all__ = [
    "AuthScreenViewModel",
    "CREDENTIALS_REQUIRED",
    "PASSWORD_HINT",
    "AuthMode",
    "AuthScreenOutput",
]
