"""
Local session persistence.

Keeps the last signed-in session in a JSON file so the next process start can
restore it. Only one session is stored; saving replaces it.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import ValidationError

from stackscroll.domain.entities import Session

logger = logging.getLogger(__name__)


class FileSessionStore:
    def __init__(self, path: str | Path, *, create_dirs: bool = True) -> None:
        self.path = Path(path)
        self.create_dirs = create_dirs

    def load(self) -> Session | None:
        if not self.path.exists():
            return None
        try:
            return Session.model_validate_json(self.path.read_text())
        except (ValidationError, OSError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return None

    def save(self, session: Session) -> None:
        if self.create_dirs:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(session.model_dump(mode="json")))
        os.replace(tmp_path, self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class InMemorySessionStore:
    """Session persistence for tests and throwaway dev runs."""

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    def load(self) -> Session | None:
        return self._session

    def save(self, session: Session) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None
