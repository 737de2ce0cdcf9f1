"""
Sharing component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class ClipboardPort(Protocol):
    """Port for the system clipboard."""

    def copy(self, text: str) -> None:
        """Write text to the clipboard. Raises on failure."""
        ...
