from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from stackscroll.adapters.clock import SystemClock
from stackscroll.adapters.memory_store import InMemoryContentStore
from stackscroll.adapters.session_file import FileSessionStore
from stackscroll.adapters.supabase_rest import SupabaseRestStore
from stackscroll.components.authenticate import AuthScreenViewModel
from stackscroll.components.compose import ComposeViewModel
from stackscroll.components.listing import ArticleStorePort, ListingViewModel
from stackscroll.components.session import AuthStorePort, SessionManager
from stackscroll.components.sharing import ClipboardPort
from stackscroll.config.models import AppConfig
from stackscroll.domain.entities import ArticleId

logger = logging.getLogger(__name__)


class ContentStore(AuthStorePort, ArticleStorePort, Protocol):
    """Both halves of the remote store, as every adapter provides them."""


@dataclass
class ServiceContext:
    config: AppConfig
    store: ContentStore
    session: SessionManager

    @classmethod
    def create(cls, config: AppConfig) -> ServiceContext:
        store: ContentStore
        if config.store.backend == "supabase":
            assert config.store.url and config.store.anon_key
            cache = FileSessionStore(Path(config.session.path)) if config.session.persist else None
            store = SupabaseRestStore(
                config.store.url,
                config.store.anon_key,
                session_cache=cache,
                clock=SystemClock(),
                table=config.store.table,
                timeout=config.store.timeout_seconds,
            )
        else:
            logger.info("Using in-memory dev store; nothing will be persisted")
            store = InMemoryContentStore(SystemClock(), auto_confirm=config.store.auto_confirm)

        session = SessionManager(store, min_password_length=config.auth.min_password_length)
        return cls(config=config, store=store, session=session)

    # --- View-model factories ---

    def listing(
        self,
        clipboard: ClipboardPort,
        focus_id: ArticleId | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> ListingViewModel:
        return ListingViewModel(
            self.store,
            clipboard,
            self.config.site.base_url,
            path_prefix=self.config.site.share_path_prefix,
            preview_chars=self.config.listing.preview_chars,
            focus_id=focus_id,
            on_change=on_change,
        )

    def compose(self, on_change: Callable[[], None] | None = None) -> ComposeViewModel:
        return ComposeViewModel(self.store, on_change=on_change)

    def authenticate(self, on_change: Callable[[], None] | None = None) -> AuthScreenViewModel:
        return AuthScreenViewModel(self.session, on_change=on_change)

    async def close(self) -> None:
        self.session.dispose()
        if isinstance(self.store, SupabaseRestStore):
            await self.store.aclose()
