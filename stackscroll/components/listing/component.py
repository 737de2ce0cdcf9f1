"""
Listing component - Article list view-model.

Fetches the `posts` collection newest-first, keeps at most one article
expanded, and gates deletion by authorship.

Invariants:
- Only the most recently issued load() may write the article sequence
- A failed load or delete leaves the previous sequence untouched
- Expanded selection is held by article id, never by copy
- Delete reaches the store only for the article's author
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from stackscroll.components.sharing import ClipboardPort, ShareLinkInput
from stackscroll.components.sharing import run as run_share
from stackscroll.domain.entities import Article, ArticleId, User
from stackscroll.domain.errors import AuthorizationDenied, StackScrollError
from stackscroll.domain.policy import can_delete_article

from .models import (
    COPY_FAILED,
    DEFAULT_PREVIEW_CHARS,
    DELETE_DENIED,
    DELETE_FAILED,
    LINK_COPIED,
    LOAD_FAILED,
    READ_MORE,
    SHOW_LESS,
    TRUNCATION_MARKER,
    ActionOutput,
    ListingState,
)
from .ports import ArticleStorePort

logger = logging.getLogger(__name__)


def render_preview(
    body: str,
    expanded: bool,
    preview_chars: int = DEFAULT_PREVIEW_CHARS,
    marker: str = TRUNCATION_MARKER,
) -> str:
    """
    Project an article body for display.

    Collapsed bodies are cut at `preview_chars` characters and always get the
    marker, even when nothing was cut.
    """
    if expanded:
        return body
    return body[:preview_chars] + marker


class ListingViewModel:
    def __init__(
        self,
        store: ArticleStorePort,
        clipboard: ClipboardPort,
        base_url: str,
        *,
        path_prefix: str = "/blog",
        preview_chars: int = DEFAULT_PREVIEW_CHARS,
        focus_id: ArticleId | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.store = store
        self.clipboard = clipboard
        self.base_url = base_url
        self.path_prefix = path_prefix
        self.preview_chars = preview_chars
        self.on_change = on_change
        self.state = ListingState()
        self._focus_id = focus_id
        self._request_seq = 0

    # --- Read-only projections ---

    @property
    def articles(self) -> list[Article]:
        return self.state.articles

    @property
    def expanded_id(self) -> ArticleId | None:
        return self.state.expanded_id

    @property
    def is_empty(self) -> bool:
        return not self.state.loading and not self.state.articles

    def is_expanded(self, article: Article) -> bool:
        return self.state.expanded_id is not None and self.state.expanded_id == article.id

    def render(self, article: Article) -> str:
        return render_preview(article.body, self.is_expanded(article), self.preview_chars)

    def toggle_label(self, article: Article) -> str:
        return SHOW_LESS if self.is_expanded(article) else READ_MORE

    def display_date(self, article: Article) -> str:
        return article.created_at.strftime("%Y-%m-%d")

    def can_delete(self, article: Article, current_user: User | None) -> bool:
        return can_delete_article(current_user, article)

    # --- Local state ---

    def toggle_expand(self, article: Article) -> None:
        if self.is_expanded(article):
            self.state.expanded_id = None
        else:
            self.state.expanded_id = article.id
        self._changed()

    # --- Remote actions ---

    async def load(self) -> ActionOutput:
        self._request_seq += 1
        seq = self._request_seq
        self.state.loading = True

        try:
            articles = await self.store.list_articles(order_by="created_at", descending=True)
        except StackScrollError as e:
            if seq != self._request_seq:
                logger.debug(f"Discarding stale load failure (request {seq})")
                return ActionOutput(success=False, error=e, superseded=True)
            logger.error(f"Error fetching posts: {e.message}")
            self.state.error = LOAD_FAILED
            self.state.loading = False
            self._changed()
            return ActionOutput(success=False, message=LOAD_FAILED, error=e)

        if seq != self._request_seq:
            logger.debug(f"Discarding stale load result (request {seq})")
            return ActionOutput(success=True, superseded=True)

        self.state.articles = articles
        self.state.error = None
        self.state.loading = False
        self._reconcile_selection()
        self._changed()
        return ActionOutput(success=True)

    async def delete(self, article: Article, current_user: User | None) -> ActionOutput:
        """Delete an article. The caller has already confirmed with the user."""
        if not self.can_delete(article, current_user):
            logger.warning(f"Refusing delete of post {article.id}: caller is not the author")
            return ActionOutput(
                success=False,
                message=DELETE_DENIED,
                error=AuthorizationDenied(DELETE_DENIED),
            )

        try:
            await self.store.delete_article(article.id)
        except StackScrollError as e:
            logger.error(f"Error deleting post {article.id}: {e.message}")
            self.state.error = DELETE_FAILED
            self._changed()
            return ActionOutput(success=False, message=DELETE_FAILED, error=e)

        logger.info(f"Deleted post {article.id}")
        await self.load()
        return ActionOutput(success=True)

    def share(self, article: Article) -> ActionOutput:
        out = run_share(
            ShareLinkInput(
                article_id=article.id,
                base_url=self.base_url,
                path_prefix=self.path_prefix,
            ),
            clipboard=self.clipboard,
        )
        if not out.success:
            return ActionOutput(success=False, message=COPY_FAILED, url=out.url)
        return ActionOutput(success=True, message=LINK_COPIED, url=out.url)

    # --- Internals ---

    def _reconcile_selection(self) -> None:
        ids = {a.id for a in self.state.articles}

        if self._focus_id is not None:
            wanted = str(self._focus_id)
            match = next((a for a in self.state.articles if str(a.id) == wanted), None)
            if match:
                self.state.expanded_id = match.id
            self._focus_id = None
        elif self.state.expanded_id is not None and self.state.expanded_id not in ids:
            self.state.expanded_id = None

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
