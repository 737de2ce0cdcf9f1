from datetime import UTC, datetime, timedelta

import pytest

from stackscroll.adapters.memory_store import InMemoryContentStore
from stackscroll.components.session import SessionManager
from stackscroll.domain.entities import User


class MockClock:
    """Deterministic clock; advance() moves it forward."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        self._time = fixed_time or datetime(2025, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time

    def advance(self, delta: timedelta) -> None:
        self._time = self._time + delta


class MockClipboard:
    def __init__(self) -> None:
        self.fail = False
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        if self.fail:
            raise RuntimeError("clipboard unavailable")
        self.copied.append(text)


@pytest.fixture
def clock():
    return MockClock()


@pytest.fixture
def clipboard():
    return MockClipboard()


@pytest.fixture
def store(clock) -> InMemoryContentStore:
    """Dev store with no latency; accounts must be added explicitly."""
    return InMemoryContentStore(clock)


@pytest.fixture
def alice(store) -> User:
    return store.add_account("alice@example.com", "secret-pw")


@pytest.fixture
def bob(store) -> User:
    return store.add_account("bob@example.com", "hunter22")


@pytest.fixture
def session_manager(store) -> SessionManager:
    return SessionManager(store)
