"""
Sharing component - Canonical article links copied to the clipboard.
"""

from .component import (
    DEFAULT_PATH_PREFIX,
    build_article_url,
    run,
    validate_article_id,
    validate_base_url,
)
from .models import (
    ShareLinkInput,
    ShareLinkOutput,
    SharingValidationError,
)
from .ports import ClipboardPort

__all__ = [
    # Component
    "run",
    # Pure functions
    "build_article_url",
    "validate_article_id",
    "validate_base_url",
    # Constants
    "DEFAULT_PATH_PREFIX",
    # Models
    "ShareLinkInput",
    "ShareLinkOutput",
    "SharingValidationError",
    # Ports
    "ClipboardPort",
]
