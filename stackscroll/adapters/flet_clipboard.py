import flet as ft


class FletClipboard:
    """ClipboardPort backed by the flet page (system clipboard of the client)."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page

    def copy(self, text: str) -> None:
        self.page.set_clipboard(text)
