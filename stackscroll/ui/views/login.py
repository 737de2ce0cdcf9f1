import flet as ft

from stackscroll.components.authenticate import AuthScreenViewModel
from stackscroll.ui.state import AppState


class LoginView(ft.Column): # type: ignore
    def __init__(self, page: ft.Page, vm: AuthScreenViewModel, state: AppState) -> None:
        super().__init__()
        self.page = page
        self.vm = vm
        self.state = state
        vm.on_change = self.refresh

        self.heading = ft.Text(size=28, weight=ft.FontWeight.BOLD)
        self.email = ft.TextField(label="Email address", width=360, on_change=self._email_changed)
        self.password = ft.TextField(
            label="Password",
            width=360,
            password=True,
            can_reveal_password=True,
            on_change=self._password_changed,
            on_submit=self.submit_click,
        )
        self.hint_text = ft.Text(size=12, color="onSurfaceVariant", visible=False)
        self.error_text = ft.Text(color="error", visible=False)
        self.success_text = ft.Text(color="primary", visible=False)
        self.submit_button = ft.FilledButton(width=360, on_click=self.submit_click)
        self.switch_button = ft.TextButton(on_click=self.switch_click)

        # Setup Column properties
        self.alignment = ft.MainAxisAlignment.CENTER
        self.horizontal_alignment = ft.CrossAxisAlignment.CENTER
        self.controls = [
            self.heading,
            self.error_text,
            self.success_text,
            self.email,
            self.password,
            self.hint_text,
            self.submit_button,
            self.switch_button,
        ]
        self._sync()

    def _sync(self) -> None:
        vm = self.vm
        self.heading.value = vm.heading
        self.error_text.value = vm.error or ""
        self.error_text.visible = bool(vm.error)
        self.success_text.value = vm.success_message or ""
        self.success_text.visible = bool(vm.success_message)
        self.hint_text.value = vm.password_hint or ""
        self.hint_text.visible = vm.password_hint is not None
        self.submit_button.text = vm.submit_label
        self.submit_button.disabled = vm.processing
        self.switch_button.text = vm.switch_label

    def refresh(self) -> None:
        self._sync()
        if self.page:
            self.update()

    def _email_changed(self, e: ft.ControlEvent) -> None:
        self.vm.email = self.email.value or ""

    def _password_changed(self, e: ft.ControlEvent) -> None:
        self.vm.password = self.password.value or ""

    def switch_click(self, e: ft.ControlEvent) -> None:
        self.vm.switch_mode()

    async def submit_click(self, e: ft.ControlEvent) -> None:
        out = await self.vm.submit()
        if out.success and out.navigate_to:
            self.page.go(self.state.take_redirect(default=out.navigate_to))
