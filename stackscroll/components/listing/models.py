"""
Listing component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stackscroll.domain.entities import Article, ArticleId
from stackscroll.domain.errors import StackScrollError

DEFAULT_PREVIEW_CHARS = 200
TRUNCATION_MARKER = "..."

LOAD_FAILED = "Could not load articles. Please try again."
DELETE_FAILED = "Could not delete the article. Please try again."
DELETE_DENIED = "You can only delete your own articles."
LINK_COPIED = "Link copied to clipboard!"
COPY_FAILED = "Could not copy the link."
EMPTY_LISTING = "No articles yet. Be the first to write one!"
READ_MORE = "Read more"
SHOW_LESS = "Show less"


@dataclass
class ListingState:
    """Client-local cache of the listing screen. Rebuilt from the store on demand."""

    articles: list[Article] = field(default_factory=list)
    expanded_id: ArticleId | None = None
    loading: bool = True
    error: str | None = None
    notice: str | None = None


@dataclass(frozen=True)
class ActionOutput:
    success: bool
    message: str | None = None
    error: StackScrollError | None = None
    url: str | None = None
    superseded: bool = False  # a newer request already owns the state
