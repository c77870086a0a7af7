"""Main Flet desktop application entry point."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import flet as ft

from ..config import BaseConfig
from ..logging_config import setup_logging
from .context import create_app_context
from .navigation import Router
from .views import build_auth_view, build_dashboard_view, build_month_detail_view, build_register_view


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    config = BaseConfig()
    logger = setup_logging(config)
    logger.info("Fintro desktop application starting")

    # Store writes run on the writer thread. Snapshots, field clears and the
    # repaints they trigger all run in order on the single UI thread.
    writer = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fintro-write")
    ui = ThreadPoolExecutor(max_workers=1, thread_name_prefix="fintro-ui")
    ctx = create_app_context(config, dispatch=writer.submit, post=ui.submit)
    ctx.page = page

    def on_page_close(_):
        logger.info("Application closing, shutting down worker threads")
        writer.shutdown(wait=True)
        ui.shutdown(wait=True)
        ctx.run_view_cleanups()
        ctx.reset_finance_vm()
        ctx.auth_vm.stop()

    page.on_close = on_page_close

    page.title = "Fintro (DEV)" if ctx.dev_mode else "Fintro"
    page.theme_mode = ft.ThemeMode.SYSTEM
    page.padding = 0
    page.window.width = 1100
    page.window.height = 800
    page.window.min_width = 720
    page.window.min_height = 600

    router = Router(page, ctx)
    route_builders = {
        "/login": build_auth_view,
        "/register": build_register_view,
        "/dashboard": build_dashboard_view,
        "/": build_dashboard_view,
        "/month": build_month_detail_view,
    }
    for route, builder in route_builders.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    def _on_error(e: ft.ControlEvent):  # pragma: no cover (UI callback)
        logger.error("Flet page error", extra={"event": "error", "data": getattr(e, "data", None)})

    page.on_error = _on_error

    # Start at login screen
    page.go("/login")


def run() -> None:
    ft.app(target=main)


if __name__ == "__main__":
    run()
