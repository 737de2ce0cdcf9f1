"""
Sharing component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from stackscroll.domain.entities import ArticleId

# --- Validation Error ---


@dataclass(frozen=True)
class SharingValidationError:
    """Sharing validation error."""

    code: str
    message: str
    field_name: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ShareLinkInput:
    """
    Input for copying an article's canonical link.

    The link is `{base_url}{path_prefix}/{article_id}`.
    """

    article_id: ArticleId
    base_url: str  # e.g., "https://stackscroll.dev"
    path_prefix: str = "/blog"


# --- Output Models ---


@dataclass(frozen=True)
class ShareLinkOutput:
    """Output from a share action."""

    url: str | None
    errors: list[SharingValidationError] = field(default_factory=list)
    success: bool = True
