"""
Compose component - New article draft and publish.

Invariants:
- No store call unless a user is present and title and body are non-empty
- At most one insert in flight; a publish during another is a no-op
- A failed publish keeps the draft so the user can retry
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from stackscroll.domain.entities import NewArticle, User
from stackscroll.domain.errors import AuthorizationDenied, StackScrollError, ValidationError

from .models import (
    DRAFT_INCOMPLETE,
    PUBLISH_FAILED,
    SIGN_IN_REQUIRED,
    PublishOutput,
    PublishPhase,
)
from .ports import ArticleWriterPort

logger = logging.getLogger(__name__)


def validate_draft(title: str, body: str) -> ValidationError | None:
    if not title.strip():
        return ValidationError(DRAFT_INCOMPLETE, field_name="title")
    if not body.strip():
        return ValidationError(DRAFT_INCOMPLETE, field_name="body")
    return None


class ComposeViewModel:
    def __init__(
        self,
        store: ArticleWriterPort,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.store = store
        self.on_change = on_change
        self.title = ""
        self.body = ""
        self.phase: PublishPhase = "idle"
        self.error: str | None = None

    @property
    def publishing(self) -> bool:
        return self.phase == "publishing"

    @property
    def submit_label(self) -> str:
        return "Publishing..." if self.publishing else "Publish"

    async def publish(self, current_user: User | None) -> PublishOutput:
        if self.publishing:
            logger.debug("Publish already in flight; ignoring")
            return PublishOutput(success=False, skipped=True)

        if current_user is None:
            return PublishOutput(
                success=False,
                error=AuthorizationDenied(SIGN_IN_REQUIRED),
                message=SIGN_IN_REQUIRED,
                navigate_to="authenticate",
            )

        invalid = validate_draft(self.title, self.body)
        if invalid:
            self.error = invalid.message
            self._changed()
            return PublishOutput(success=False, error=invalid, message=invalid.message)

        self.phase = "publishing"
        self.error = None
        self._changed()

        draft = NewArticle(title=self.title, body=self.body, author_id=current_user.id)
        try:
            article = await self.store.insert_article(draft)
        except StackScrollError as e:
            logger.error(f"Error publishing post: {e.message}")
            self.error = PUBLISH_FAILED
            return PublishOutput(success=False, error=e, message=PUBLISH_FAILED)
        finally:
            self.phase = "idle"
            self._changed()

        logger.info(f"Published post {article.id}")
        self.title = ""
        self.body = ""
        self.error = None
        self._changed()
        return PublishOutput(success=True, article=article, navigate_to="listing")

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
