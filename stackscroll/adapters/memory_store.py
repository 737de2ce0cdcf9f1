"""
In-memory content store (dev backend).

Implements AuthStorePort and ArticleStorePort without a network.
Used for local development and as the store behind integration tests.

Key behaviors:
- Sign-up creates an unconfirmed account unless auto_confirm is set
- Sign-in of an unconfirmed account is refused with "Email not confirmed"
- Inserts and deletes are checked against the signed-in user, like
  row-level security on the hosted table
- Ids are sequential integers, timestamps come from the injected clock
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from stackscroll.adapters.auth_events import ListenerHandle, ListenerRegistry
from stackscroll.adapters.clock import SystemClock
from stackscroll.components.session import SessionListener
from stackscroll.domain.entities import Article, ArticleId, NewArticle, Session, User
from stackscroll.domain.errors import (
    AuthorizationDenied,
    AuthRejected,
    RemoteFailure,
    StackScrollError,
)
from stackscroll.ports.clock import ClockPort

logger = logging.getLogger(__name__)

SESSION_TTL = timedelta(hours=1)
SORTABLE_FIELDS = ("created_at", "id", "title")


@dataclass
class DevAccount:
    id: str
    email: str
    password: str
    confirmed: bool


class InMemoryContentStore:
    def __init__(
        self,
        clock: ClockPort | None = None,
        *,
        auto_confirm: bool = False,
        latency: float = 0.0,
    ) -> None:
        self.clock = clock or SystemClock()
        self.auto_confirm = auto_confirm
        self.latency = latency
        self._accounts: dict[str, DevAccount] = {}
        self._articles: dict[int, Article] = {}
        self._next_id = 1
        self._session: Session | None = None
        self._listeners = ListenerRegistry()
        self._failures: dict[str, StackScrollError] = {}

    # --- Seeding / test helpers ---

    def add_account(self, email: str, password: str, confirmed: bool = True) -> User:
        account = DevAccount(id=str(uuid4()), email=email, password=password, confirmed=confirmed)
        self._accounts[email.lower()] = account
        return User(id=account.id, email=account.email)

    def confirm_email(self, email: str) -> None:
        self._accounts[email.lower()].confirmed = True

    def seed_article(
        self,
        title: str,
        body: str,
        author_id: str,
        created_at: datetime | None = None,
    ) -> Article:
        article = Article(
            id=self._next_id,
            title=title,
            body=body,
            author_id=author_id,
            created_at=created_at or self.clock.now_utc(),
        )
        self._articles[self._next_id] = article
        self._next_id += 1
        return article

    def fail_next(self, operation: str, error: StackScrollError) -> None:
        """Make the next call of `operation` raise `error`."""
        self._failures[operation] = error

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # --- AuthStorePort ---

    async def get_current_session(self) -> Session | None:
        await self._io("get_current_session")
        if self._session and self._session.is_expired(self.clock.now_utc()):
            logger.info("Dev session expired")
            self._session = None
        return self._session

    def on_session_change(self, callback: SessionListener) -> ListenerHandle:
        return self._listeners.add(callback)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        await self._io("sign_in_with_password")
        account = self._accounts.get(email.lower())
        if not account or account.password != password:
            raise AuthRejected("Invalid login credentials")
        if not account.confirmed:
            raise AuthRejected(
                "Email not confirmed",
                reason="email_not_confirmed",
                error_code="email_not_confirmed",
            )

        self._session = Session(
            access_token=f"dev-{uuid4().hex}",
            refresh_token=f"dev-refresh-{uuid4().hex}",
            expires_at=self.clock.now_utc() + SESSION_TTL,
            user=User(id=account.id, email=account.email),
        )
        self._listeners.emit("SIGNED_IN", self._session)
        return self._session

    async def sign_up(self, email: str, password: str) -> Session | None:
        await self._io("sign_up")
        if email.lower() in self._accounts:
            raise AuthRejected("User already registered", reason="signup_rejected")
        self.add_account(email, password, confirmed=self.auto_confirm)
        logger.info(f"Dev sign-up for {email} (confirmed={self.auto_confirm})")
        return None

    async def sign_out(self) -> None:
        try:
            await self._io("sign_out")
        finally:
            self._session = None
            self._listeners.emit("SIGNED_OUT", None)

    # --- ArticleStorePort ---

    async def list_articles(
        self, order_by: str = "created_at", descending: bool = True
    ) -> list[Article]:
        await self._io("list_articles")
        if order_by not in SORTABLE_FIELDS:
            raise RemoteFailure(f"Cannot order by {order_by}", status_code=400)
        return sorted(
            self._articles.values(),
            key=lambda a: getattr(a, order_by),
            reverse=descending,
        )

    async def insert_article(self, article: NewArticle) -> Article:
        await self._io("insert_article")
        user = self._require_user()
        if article.author_id != user.id:
            raise AuthorizationDenied("Author must be the signed-in user")
        return self.seed_article(article.title, article.body, article.author_id)

    async def delete_article(self, article_id: ArticleId) -> None:
        await self._io("delete_article")
        user = self._require_user()
        try:
            key = int(article_id)
        except ValueError:
            return
        existing = self._articles.get(key)
        if existing is None:
            return
        if existing.author_id != user.id:
            raise AuthorizationDenied("Only the author may delete this article")
        del self._articles[key]

    # --- Internals ---

    async def _io(self, operation: str) -> None:
        await asyncio.sleep(self.latency)
        error = self._failures.pop(operation, None)
        if error:
            raise error

    def _require_user(self) -> User:
        if not self._session or self._session.is_expired(self.clock.now_utc()):
            raise AuthorizationDenied("Not signed in")
        return self._session.user
