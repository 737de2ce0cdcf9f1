import flet as ft

from stackscroll.app_shell.navigation import path_for
from stackscroll.components.compose import ComposeViewModel
from stackscroll.ui.state import AppState


class WriteView(ft.Column): # type: ignore
    def __init__(self, page: ft.Page, vm: ComposeViewModel, state: AppState) -> None:
        super().__init__(spacing=16)
        self.page = page
        self.vm = vm
        self.state = state
        vm.on_change = self.refresh

        self.error_text = ft.Text(color="error", visible=False)
        self.title_field = ft.TextField(label="Title", on_change=self._title_changed)
        self.body_field = ft.TextField(
            label="Content (Markdown supported)",
            multiline=True,
            min_lines=10,
            on_change=self._body_changed,
        )
        self.publish_button = ft.FilledButton(on_click=self.publish_click)

        self.controls = [
            ft.Text("Write an Article", size=30, weight=ft.FontWeight.BOLD),
            self.error_text,
            self.title_field,
            self.body_field,
            self.publish_button,
        ]
        self._sync()

    def _sync(self) -> None:
        self.error_text.value = self.vm.error or ""
        self.error_text.visible = bool(self.vm.error)
        self.title_field.value = self.vm.title
        self.body_field.value = self.vm.body
        self.publish_button.text = self.vm.submit_label
        self.publish_button.disabled = self.vm.publishing

    def refresh(self) -> None:
        self._sync()
        self.update()

    def _title_changed(self, e: ft.ControlEvent) -> None:
        self.vm.title = self.title_field.value or ""

    def _body_changed(self, e: ft.ControlEvent) -> None:
        self.vm.body = self.body_field.value or ""

    async def publish_click(self, e: ft.ControlEvent) -> None:
        out = await self.vm.publish(self.state.current_user)
        if out.navigate_to == "authenticate":
            self.state.redirect_after_login = path_for("compose")
        if out.navigate_to:
            self.page.go(path_for(out.navigate_to))
