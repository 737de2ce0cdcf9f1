"""In-process fan-out of auth events for store adapters."""

from __future__ import annotations

import logging

from stackscroll.components.session import SessionListener
from stackscroll.domain.entities import AuthEvent, Session

logger = logging.getLogger(__name__)


class ListenerHandle:
    def __init__(self, registry: ListenerRegistry, callback: SessionListener) -> None:
        self._registry = registry
        self._callback: SessionListener | None = callback

    @property
    def active(self) -> bool:
        return self._callback is not None

    def unsubscribe(self) -> None:
        if self._callback is None:
            return
        self._registry.remove(self._callback)
        self._callback = None


class ListenerRegistry:
    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add(self, callback: SessionListener) -> ListenerHandle:
        self._listeners.append(callback)
        return ListenerHandle(self, callback)

    def remove(self, callback: SessionListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def emit(self, event: AuthEvent, session: Session | None) -> None:
        logger.debug(f"Emitting {event} to {len(self._listeners)} listener(s)")
        for callback in list(self._listeners):
            callback(event, session)
