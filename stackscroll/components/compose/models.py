"""
Compose component models.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from stackscroll.domain.entities import Article
from stackscroll.domain.errors import StackScrollError

PublishPhase = Literal["idle", "publishing"]

DRAFT_INCOMPLETE = "Title and content are required."
SIGN_IN_REQUIRED = "You must be signed in to publish."
PUBLISH_FAILED = "Could not publish the article. Please try again."


@dataclass(frozen=True)
class PublishOutput:
    success: bool
    article: Article | None = None
    error: StackScrollError | None = None
    message: str | None = None
    navigate_to: str | None = None  # route name to show next
    skipped: bool = False  # a publish was already in flight
