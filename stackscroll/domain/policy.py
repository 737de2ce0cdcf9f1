from stackscroll.domain.entities import Article, User


def can_delete_article(user: User | None, article: Article) -> bool:
    """Only the author may delete an article. Anonymous users never can."""
    if not user:
        return False
    return user.id == article.author_id
