import logging
from collections.abc import Callable

import flet as ft

from stackscroll.app_shell.navigation import resolve
from stackscroll.ui.state import AppState

logger = logging.getLogger(__name__)

# builder accepts page and **kwargs (route params)
ViewBuilder = Callable[..., ft.View]


class Router:
    def __init__(self, page: ft.Page, state: AppState):
        self.page = page
        self.state = state
        self.builders: dict[str, ViewBuilder] = {}

    def register(self, name: str, builder: ViewBuilder) -> None:
        self.builders[name] = builder

    def refresh(self) -> None:
        self.show(self.page.route or "/")

    def handle_route_change(self, e: ft.RouteChangeEvent) -> None:
        self.show(e.route or "/")

    def show(self, route: str) -> None:
        logger.info(f"Navigate to: {route}")
        decision = resolve(
            route,
            signed_in=self.state.current_user is not None,
            session_ready=self.state.session.ready,
        )

        if decision.kind == "redirect":
            logger.info(f"Access denied to {route}. Redirecting to {decision.path}.")
            self.state.redirect_after_login = decision.next_path
            self.page.go(decision.path)
            return

        self.page.views.clear()

        if decision.kind == "loading":
            self.page.views.append(
                ft.View(route, [ft.Text("Loading...", color="onSurfaceVariant")])
            )
        elif decision.kind == "not_found" or decision.name not in self.builders:
            logger.warning(f"No route found for: {route}")
            self.page.views.append(
                ft.View(
                    "/404",
                    [ft.AppBar(title=ft.Text("404")), ft.Text(f"Page not found: {route}")],
                )
            )
        else:
            builder = self.builders[decision.name]
            self.page.views.append(builder(self.page, **decision.params))

        self.page.update()

    def view_pop(self, view: ft.View) -> None:
        if len(self.page.views) < 2:
            return
        self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)
