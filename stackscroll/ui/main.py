import logging

import flet as ft

from stackscroll.adapters.flet_clipboard import FletClipboard
from stackscroll.app_shell.navigation import ROUTES
from stackscroll.app_shell.router import Router
from stackscroll.config.loader import load_config, resolve_config_path, validate_config
from stackscroll.ui.context import ServiceContext
from stackscroll.ui.layout import MainLayout
from stackscroll.ui.state import AppState
from stackscroll.ui.theme import AppTheme
from stackscroll.ui.views.blog import BlogListView
from stackscroll.ui.views.home import HomeContent
from stackscroll.ui.views.login import LoginView
from stackscroll.ui.views.write import WriteView

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def main(page: ft.Page) -> None:
    # 1. Load and validate configuration
    config_path = resolve_config_path()
    try:
        config = load_config(config_path)
    except ValueError as e:
        logger.error(str(e))
        page.add(ft.Text(str(e), color="red", size=20))
        return

    problems = validate_config(config)
    if problems:
        for problem in problems:
            logger.error(f"Config: {problem}")
        page.add(ft.Text("Invalid configuration:\n" + "\n".join(problems), color="red"))
        return
    logger.info(f"Config loaded from {config_path} (backend: {config.store.backend})")

    page.title = config.site.title
    page.theme = AppTheme.light_theme()
    page.dark_theme = AppTheme.dark_theme()
    page.theme_mode = ft.ThemeMode.DARK

    # 2. Context and session restore
    ctx = ServiceContext.create(config)
    state = AppState(session=ctx.session)
    clipboard = FletClipboard(page)
    router = Router(page, state)

    # --- Layout Wrapper ---
    def make_view(route: str, content: ft.Control) -> ft.View:
        async def sign_out() -> None:
            await ctx.session.sign_out()
            page.go(ROUTES["home"])

        layout = MainLayout(
            app_state=state,
            content=content,
            on_nav=page.go,
            on_sign_out=lambda: page.run_task(sign_out),
            site_title=config.site.title,
        )
        return ft.View(route, [layout], padding=0)

    # --- Builders ---

    def home_builder(_: ft.Page) -> ft.View:
        return make_view(ROUTES["home"], HomeContent(page))

    def listing_builder(_: ft.Page, article_id: str | None = None) -> ft.View:
        vm = ctx.listing(clipboard, focus_id=article_id)
        route = f"{ROUTES['listing']}/{article_id}" if article_id else ROUTES["listing"]
        return make_view(route, BlogListView(page, vm, state))

    def compose_builder(_: ft.Page) -> ft.View:
        return make_view(ROUTES["compose"], WriteView(page, ctx.compose(), state))

    def login_builder(_: ft.Page) -> ft.View:
        return make_view(ROUTES["authenticate"], LoginView(page, ctx.authenticate(), state))

    router.register("home", home_builder)
    router.register("listing", listing_builder)
    router.register("article", listing_builder)
    router.register("compose", compose_builder)
    router.register("authenticate", login_builder)

    page.on_route_change = router.handle_route_change
    page.on_view_pop = router.view_pop

    # Losing the session (sign-out, refused refresh) re-renders the current route.
    # Sign-in navigates on its own from the login view.
    ctx.session.subscribe(lambda user: router.refresh() if user is None else None)

    async def handle_close(_: ft.ControlEvent) -> None:
        await ctx.close()

    page.on_close = handle_close

    await ctx.session.initialize()
    router.refresh()


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
