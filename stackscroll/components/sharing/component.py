"""
Sharing component - Canonical article links.

Builds the public link of an article from the site base URL and the
article identifier, then hands it to the clipboard.

Invariants:
- Links never depend on the content store (no network call)
- Base URL must be an absolute http(s) URL
- A clipboard failure is reported, never raised
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlparse

from stackscroll.domain.entities import ArticleId

from .models import ShareLinkInput, ShareLinkOutput, SharingValidationError
from .ports import ClipboardPort

logger = logging.getLogger(__name__)

DEFAULT_PATH_PREFIX = "/blog"


# --- Pure Functions (Functional Core) ---


def validate_base_url(base_url: str) -> list[SharingValidationError]:
    """
    Validate that base_url is a valid absolute URL.

    Args:
        base_url: The base URL to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[SharingValidationError] = []

    if not base_url:
        errors.append(
            SharingValidationError(
                code="EMPTY_BASE_URL",
                message="Base URL cannot be empty",
                field_name="base_url",
            )
        )
        return errors

    parsed = urlparse(base_url)

    if not parsed.scheme:
        errors.append(
            SharingValidationError(
                code="MISSING_SCHEME",
                message="Base URL must include scheme (http or https)",
                field_name="base_url",
            )
        )

    if not parsed.netloc:
        errors.append(
            SharingValidationError(
                code="MISSING_HOST",
                message="Base URL must include host",
                field_name="base_url",
            )
        )

    if parsed.scheme and parsed.scheme not in ("http", "https"):
        errors.append(
            SharingValidationError(
                code="INVALID_SCHEME",
                message="Base URL scheme must be http or https",
                field_name="base_url",
            )
        )

    return errors


def validate_article_id(article_id: ArticleId | None) -> list[SharingValidationError]:
    if article_id is None or str(article_id) == "":
        return [
            SharingValidationError(
                code="EMPTY_ARTICLE_ID",
                message="Article identifier cannot be empty",
                field_name="article_id",
            )
        ]
    return []


def build_article_url(
    base_url: str,
    article_id: ArticleId,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> str:
    """
    Build the canonical article URL.

    Args:
        base_url: Site base URL (e.g., "https://stackscroll.dev")
        article_id: Server-assigned article identifier
        path_prefix: Path prefix (e.g., "/blog")

    Returns:
        Full article URL
    """
    base = base_url.rstrip("/")

    if path_prefix.startswith("/"):
        prefix = path_prefix.rstrip("/")
    else:
        prefix = f"/{path_prefix}".rstrip("/")

    return f"{base}{prefix}/{quote(str(article_id), safe='')}"


# --- Shell ---


def run(inp: ShareLinkInput, *, clipboard: ClipboardPort) -> ShareLinkOutput:
    """
    Build the article link and copy it to the clipboard.

    Args:
        inp: ShareLinkInput with article id and base URL
        clipboard: Clipboard port

    Returns:
        ShareLinkOutput with the URL, or errors
    """
    errors: list[SharingValidationError] = []
    errors.extend(validate_base_url(inp.base_url))
    errors.extend(validate_article_id(inp.article_id))

    if errors:
        return ShareLinkOutput(url=None, errors=errors, success=False)

    url = build_article_url(inp.base_url, inp.article_id, inp.path_prefix)

    try:
        clipboard.copy(url)
    except Exception as e:
        logger.error(f"Failed to copy: {e}")
        return ShareLinkOutput(
            url=url,
            errors=[
                SharingValidationError(
                    code="CLIPBOARD_FAILED",
                    message="Could not copy link to clipboard",
                )
            ],
            success=False,
        )

    return ShareLinkOutput(url=url, errors=[], success=True)
