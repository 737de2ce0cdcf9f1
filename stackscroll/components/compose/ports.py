"""
Compose component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from stackscroll.domain.entities import Article, NewArticle


class ArticleWriterPort(Protocol):
    """Port for inserting into the remote `posts` collection."""

    async def insert_article(self, article: NewArticle) -> Article:
        ...
