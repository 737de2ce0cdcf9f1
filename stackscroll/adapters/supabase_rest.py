"""
Supabase REST adapter.

Implements AuthStorePort and ArticleStorePort against a Supabase project:
GoTrue for auth (`/auth/v1`) and PostgREST for the posts table (`/rest/v1`).

Key behaviors:
- Every call is a non-blocking httpx request
- The signed-in session is persisted through a SessionCachePort so the next
  process start restores it
- An expired access token is refreshed with the stored refresh token before
  it is used; a refused refresh ends the session
- Transport errors and non-2xx responses become domain errors
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from stackscroll.adapters.auth_events import ListenerHandle, ListenerRegistry
from stackscroll.adapters.clock import SystemClock
from stackscroll.components.session import SessionListener
from stackscroll.domain.entities import Article, ArticleId, NewArticle, Session, User
from stackscroll.domain.errors import (
    AuthorizationDenied,
    AuthRejected,
    RemoteFailure,
    classify_auth_rejection,
)
from stackscroll.ports.clock import ClockPort

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_TABLE = "posts"

# Refresh a little before the server would reject the token.
EXPIRY_MARGIN = timedelta(seconds=30)

AUTH_REJECT_STATUSES = (400, 401, 403, 422)
SIGNED_OUT_STATUSES = (401, 403, 404)


class SessionCachePort(Protocol):
    def load(self) -> Session | None:
        ...

    def save(self, session: Session) -> None:
        ...

    def clear(self) -> None:
        ...


def error_details(response: httpx.Response) -> tuple[str, str | None]:
    """Pull a human-readable message and an error code out of an error body."""
    try:
        payload = response.json()
    except ValueError:
        return (response.text or response.reason_phrase or f"HTTP {response.status_code}", None)

    if not isinstance(payload, dict):
        return (str(payload), None)

    message = ""
    for key in ("msg", "message", "error_description", "error"):
        value = payload.get(key)
        if isinstance(value, str) and value:
            message = value
            break

    code = payload.get("error_code")
    if code is None and isinstance(payload.get("code"), str):
        code = payload["code"]

    return (message or f"HTTP {response.status_code}", code)


def parse_session(payload: dict[str, Any], now: datetime) -> Session:
    try:
        user_data = payload["user"]
        expires_at: datetime | None = None
        if payload.get("expires_at"):
            expires_at = datetime.fromtimestamp(int(payload["expires_at"]), UTC)
        elif payload.get("expires_in"):
            expires_at = now + timedelta(seconds=int(payload["expires_in"]))
        return Session(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=expires_at,
            user=User(id=str(user_data["id"]), email=user_data.get("email")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise RemoteFailure(f"Malformed session payload: {e}") from e


class SupabaseRestStore:
    def __init__(
        self,
        url: str,
        anon_key: str,
        *,
        session_cache: SessionCachePort | None = None,
        clock: ClockPort | None = None,
        table: str = DEFAULT_TABLE,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.session_cache = session_cache
        self.clock = clock or SystemClock()
        self.table = table
        self._client = httpx.AsyncClient(
            base_url=self.url,
            timeout=timeout,
            transport=transport,
            headers={"apikey": anon_key},
        )
        self._session: Session | None = None
        self._listeners = ListenerRegistry()

    async def aclose(self) -> None:
        await self._client.aclose()

    # --- AuthStorePort ---

    async def get_current_session(self) -> Session | None:
        if self._session is None and self.session_cache is not None:
            self._session = self.session_cache.load()
        if self._session is None:
            return None
        return await self._ensure_fresh()

    def on_session_change(self, callback: SessionListener) -> ListenerHandle:
        return self._listeners.add(callback)

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in AUTH_REJECT_STATUSES:
            message, code = error_details(response)
            raise AuthRejected(
                message, reason=classify_auth_rejection(message, code), error_code=code
            )
        self._raise_for_status(response)

        session = parse_session(self._json(response), self.clock.now_utc())
        self._store_session(session)
        self._listeners.emit("SIGNED_IN", session)
        return session

    async def sign_up(self, email: str, password: str) -> Session | None:
        response = await self._request(
            "POST", "/auth/v1/signup", json={"email": email, "password": password}
        )
        if 400 <= response.status_code < 500:
            message, code = error_details(response)
            raise AuthRejected(message, reason="signup_rejected", error_code=code)
        self._raise_for_status(response)

        # Not stored: a new account is only usable after email verification.
        payload = self._json(response)
        if isinstance(payload, dict) and payload.get("access_token"):
            return parse_session(payload, self.clock.now_utc())
        return None

    async def sign_out(self) -> None:
        session = self._session
        self._clear_session()
        try:
            if session is not None:
                response = await self._request(
                    "POST",
                    "/auth/v1/logout",
                    headers={"Authorization": f"Bearer {session.access_token}"},
                )
                if response.status_code not in SIGNED_OUT_STATUSES:
                    self._raise_for_status(response)
        finally:
            self._listeners.emit("SIGNED_OUT", None)

    # --- ArticleStorePort ---

    async def list_articles(
        self, order_by: str = "created_at", descending: bool = True
    ) -> list[Article]:
        direction = "desc" if descending else "asc"
        response = await self._request(
            "GET",
            f"/rest/v1/{self.table}",
            params={"select": "*", "order": f"{order_by}.{direction}"},
            headers=await self._data_headers(),
        )
        self._raise_for_status(response)

        rows = self._json(response)
        if not isinstance(rows, list):
            raise RemoteFailure("Expected a list of rows")
        try:
            return [Article.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RemoteFailure(f"Malformed article row: {e}") from e

    async def insert_article(self, article: NewArticle) -> Article:
        headers = await self._data_headers()
        headers["Prefer"] = "return=representation"
        response = await self._request(
            "POST",
            f"/rest/v1/{self.table}",
            json=[article.to_row()],
            headers=headers,
        )
        self._raise_for_status(response)

        rows = self._json(response)
        if not isinstance(rows, list) or not rows:
            raise RemoteFailure("Insert returned no row")
        try:
            return Article.model_validate(rows[0])
        except ValidationError as e:
            raise RemoteFailure(f"Malformed article row: {e}") from e

    async def delete_article(self, article_id: ArticleId) -> None:
        response = await self._request(
            "DELETE",
            f"/rest/v1/{self.table}",
            params={"id": f"eq.{article_id}"},
            headers=await self._data_headers(),
        )
        self._raise_for_status(response)

    # --- Internals ---

    def _json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            request = response.request
            logger.error(f"{request.method} {request.url.path} returned a non-JSON body: {e}")
            raise RemoteFailure("Malformed response", status_code=response.status_code) from e

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise RemoteFailure(f"Request failed: {e}") from e

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        message, _ = error_details(response)
        status = response.status_code
        request = response.request
        logger.warning(f"{request.method} {request.url.path} -> {status}: {message}")
        if status in (401, 403):
            raise AuthorizationDenied(message)
        raise RemoteFailure(message, status_code=status)

    async def _data_headers(self) -> dict[str, str]:
        session = await self._ensure_fresh() if self._session else None
        token = session.access_token if session else self.anon_key
        return {"Authorization": f"Bearer {token}"}

    async def _ensure_fresh(self) -> Session | None:
        session = self._session
        if session is None:
            return None
        if not session.is_expired(self.clock.now_utc() + EXPIRY_MARGIN):
            return session

        if not session.refresh_token:
            logger.info("Session expired without refresh token")
            self._clear_session()
            self._listeners.emit("SIGNED_OUT", None)
            return None

        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": session.refresh_token},
        )
        if response.status_code in AUTH_REJECT_STATUSES:
            message, _ = error_details(response)
            logger.info(f"Session refresh refused: {message}")
            self._clear_session()
            self._listeners.emit("SIGNED_OUT", None)
            return None
        self._raise_for_status(response)

        refreshed = parse_session(self._json(response), self.clock.now_utc())
        self._store_session(refreshed)
        self._listeners.emit("TOKEN_REFRESHED", refreshed)
        return refreshed

    def _store_session(self, session: Session) -> None:
        self._session = session
        if self.session_cache is not None:
            self.session_cache.save(session)

    def _clear_session(self) -> None:
        self._session = None
        if self.session_cache is not None:
            self.session_cache.clear()
