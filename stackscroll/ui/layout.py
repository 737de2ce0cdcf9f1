
from collections.abc import Callable

import flet as ft

from stackscroll.app_shell.navigation import ROUTES
from stackscroll.ui.state import AppState

NAVIGATION = [
    ("Home", ROUTES["home"]),
    ("Blog", ROUTES["listing"]),
    ("Write", ROUTES["compose"]),
]


class MainLayout(ft.Column): # type: ignore
    """
    Top navigation bar above the routed content.
    Shows "Sign out" while a user is signed in, "Sign in" otherwise.
    """
    def __init__(
        self,
        app_state: AppState,
        content: ft.Control, # The dynamic view
        on_nav: Callable[[str], None],
        on_sign_out: Callable[[], None],
        site_title: str = "StackScroll",
    ):
        super().__init__(expand=True, spacing=0)
        self.app_state = app_state
        self.on_nav = on_nav
        self.on_sign_out = on_sign_out

        signed_in = self.app_state.current_user is not None

        links = [
            ft.TextButton(name, on_click=lambda _, r=route: self.on_nav(r))
            for name, route in NAVIGATION
        ]

        account_action = ft.TextButton(
            "Sign out", on_click=lambda _: self.on_sign_out()
        ) if signed_in else ft.TextButton(
            "Sign in", on_click=lambda _: self.on_nav(ROUTES["authenticate"])
        )

        self.nav_bar = ft.Container(
            content=ft.Row(
                [
                    ft.Text(site_title, size=20, weight=ft.FontWeight.BOLD, color="primary"),
                    ft.Row(links, spacing=8),
                    ft.Container(expand=True),
                    account_action,
                ],
                alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
            ),
            padding=ft.padding.symmetric(horizontal=20, vertical=10),
            bgcolor="surface",
        )

        self.content_area = ft.Container(
            content=content,
            expand=True,
            padding=ft.padding.symmetric(horizontal=32, vertical=24),
            alignment=ft.alignment.top_center,
        )

        self.controls = [self.nav_bar, self.content_area]
