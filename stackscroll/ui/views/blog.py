import logging

import flet as ft

from stackscroll.components.listing import EMPTY_LISTING, ListingViewModel
from stackscroll.domain.entities import Article
from stackscroll.ui.state import AppState

logger = logging.getLogger(__name__)


class BlogListView(ft.Column): # type: ignore
    """Latest articles, newest first. Loads on mount."""

    def __init__(self, page: ft.Page, vm: ListingViewModel, state: AppState) -> None:
        super().__init__(scroll=ft.ScrollMode.AUTO, expand=True, spacing=16)
        self.page = page
        self.vm = vm
        self.state = state
        vm.on_change = self.refresh
        self._sync()

    def did_mount(self) -> None:
        self.page.run_task(self.vm.load)

    def refresh(self) -> None:
        self._sync()
        self.update()

    # --- Rendering ---

    def _sync(self) -> None:
        controls: list[ft.Control] = [
            ft.Text("Latest Articles", size=30, weight=ft.FontWeight.BOLD)
        ]

        if self.vm.state.error:
            controls.append(ft.Text(self.vm.state.error, color="error"))

        if self.vm.state.loading and not self.vm.articles:
            controls.append(ft.Text("Loading...", color="onSurfaceVariant"))
        elif self.vm.is_empty:
            controls.append(ft.Text(EMPTY_LISTING, color="onSurfaceVariant"))
        else:
            controls.extend(self._card(article) for article in self.vm.articles)

        self.controls = controls

    def _card(self, article: Article) -> ft.Control:
        actions: list[ft.Control] = [
            ft.IconButton(
                ft.Icons.SHARE_OUTLINED,
                tooltip="Copy link",
                on_click=lambda _, a=article: self._share(a),
            )
        ]
        if self.vm.can_delete(article, self.state.current_user):
            actions.append(
                ft.IconButton(
                    ft.Icons.DELETE_OUTLINE,
                    tooltip="Delete",
                    icon_color="error",
                    on_click=lambda _, a=article: self._confirm_delete(a),
                )
            )

        return ft.Card(
            content=ft.Container(
                padding=24,
                content=ft.Column(
                    [
                        ft.Row(
                            [
                                ft.Text(article.title, size=20, weight=ft.FontWeight.W_600),
                                ft.Row(actions, spacing=0),
                            ],
                            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                        ),
                        ft.Container(
                            content=ft.Markdown(
                                self.vm.render(article),
                                selectable=True,
                                extension_set=ft.MarkdownExtensionSet.GITHUB_WEB,
                            ),
                            on_click=lambda _, a=article: self.vm.toggle_expand(a),
                        ),
                        ft.Row(
                            [
                                ft.Text(
                                    self.vm.display_date(article),
                                    size=12,
                                    color="onSurfaceVariant",
                                ),
                                ft.TextButton(
                                    self.vm.toggle_label(article),
                                    on_click=lambda _, a=article: self.vm.toggle_expand(a),
                                ),
                            ],
                            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                        ),
                    ]
                ),
            )
        )

    # --- Actions ---

    def _share(self, article: Article) -> None:
        out = self.vm.share(article)
        self.page.open(ft.SnackBar(ft.Text(out.message or "")))

    def _confirm_delete(self, article: Article) -> None:
        async def do_delete(_: ft.ControlEvent) -> None:
            self.page.close(dialog)
            out = await self.vm.delete(article, self.state.current_user)
            if not out.success and out.message:
                self.page.open(ft.SnackBar(ft.Text(out.message)))

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Delete article"),
            content=ft.Text("Are you sure you want to delete this post?"),
            actions=[
                ft.TextButton("Cancel", on_click=lambda _: self.page.close(dialog)),
                ft.TextButton("Delete", on_click=do_delete),
            ],
        )
        self.page.open(dialog)
