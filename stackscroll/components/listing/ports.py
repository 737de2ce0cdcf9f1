"""
Listing component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from stackscroll.domain.entities import Article, ArticleId, NewArticle


class ArticleStorePort(Protocol):
    """Port for the remote `posts` collection."""

    async def list_articles(
        self, order_by: str = "created_at", descending: bool = True
    ) -> list[Article]:
        ...

    async def insert_article(self, article: NewArticle) -> Article:
        """Server assigns id and created_at."""
        ...

    async def delete_article(self, article_id: ArticleId) -> None:
        ...
