"""
Authenticate component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from stackscroll.domain.errors import StackScrollError

AuthMode = Literal["signin", "signup"]

CREDENTIALS_REQUIRED = "Please enter email and password."
PASSWORD_HINT = "Password must be at least {min_length} characters long"


@dataclass(frozen=True)
class AuthScreenOutput:
    success: bool
    error: StackScrollError | None = None
    message: str | None = None
    navigate_to: str | None = None
    skipped: bool = False
