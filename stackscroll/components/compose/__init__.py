"""
Compose component - Draft a new article and publish it.
"""

from .component import ComposeViewModel, validate_draft
from .models import (
    DRAFT_INCOMPLETE,
    PUBLISH_FAILED,
    SIGN_IN_REQUIRED,
    PublishOutput,
    PublishPhase,
)
from .ports import ArticleWriterPort

__all__ = [
    "ComposeViewModel",
    "validate_draft",
    "DRAFT_INCOMPLETE",
    "PUBLISH_FAILED",
    "SIGN_IN_REQUIRED",
    "PublishOutput",
    "PublishPhase",
    "ArticleWriterPort",
]
