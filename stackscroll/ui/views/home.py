import flet as ft

from stackscroll.app_shell.navigation import ROUTES


def HomeContent(page: ft.Page) -> ft.Control:
    return ft.Column(
        [
            ft.Text(
                "Share Your Technical Knowledge",
                size=48,
                weight=ft.FontWeight.BOLD,
                color="primary",
                text_align=ft.TextAlign.CENTER,
            ),
            ft.Text(
                "Create and share in-depth technical articles with the developer community.",
                size=18,
                color="onSurfaceVariant",
                text_align=ft.TextAlign.CENTER,
            ),
            ft.Row(
                [
                    ft.FilledButton(
                        "Start Writing", on_click=lambda _: page.go(ROUTES["compose"])
                    ),
                    ft.TextButton(
                        "Read Articles →", on_click=lambda _: page.go(ROUTES["listing"])
                    ),
                ],
                alignment=ft.MainAxisAlignment.CENTER,
            ),
        ],
        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        spacing=24,
    )
