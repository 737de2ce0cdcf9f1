"""
Listing component - Article list, expand/collapse, delete and share.
"""

from .component import ListingViewModel, render_preview
from .models import (
    COPY_FAILED,
    DEFAULT_PREVIEW_CHARS,
    DELETE_DENIED,
    DELETE_FAILED,
    EMPTY_LISTING,
    LINK_COPIED,
    LOAD_FAILED,
    READ_MORE,
    SHOW_LESS,
    TRUNCATION_MARKER,
    ActionOutput,
    ListingState,
)
from .ports import ArticleStorePort

__all__ = [
    # Component
    "ListingViewModel",
    "render_preview",
    # Constants
    "DEFAULT_PREVIEW_CHARS",
    "TRUNCATION_MARKER",
    "COPY_FAILED",
    "DELETE_DENIED",
    "DELETE_FAILED",
    "EMPTY_LISTING",
    "LINK_COPIED",
    "LOAD_FAILED",
    "READ_MORE",
    "SHOW_LESS",
    # Models
    "ActionOutput",
    "ListingState",
    # Ports
    "ArticleStorePort",
]
