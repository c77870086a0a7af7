"""Route table and sign-in guard for the desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ..logging_config import get_logger
from .components import open_dialog

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)

ViewBuilder = Callable[["AppContext", ft.Page], ft.View]

PUBLIC_ROUTES = frozenset({"/login", "/register"})
LOGIN_ROUTE = "/login"
HOME_ROUTE = "/dashboard"


class Router:
    """Maps routes to view builders; only public routes work signed out."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        self.routes[route] = builder

    def resolve(self, route: str) -> Optional[str]:
        """Return the route to build, or None when the user must sign in first."""

        if route not in PUBLIC_ROUTES and self.context.auth.current_user is None:
            return None
        if route in self.routes:
            return route
        logger.warning("Unknown route, showing dashboard", extra={"route": route})
        return HOME_ROUTE

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        requested = e.route or "/"
        route = self.resolve(requested)
        if route is None:
            logger.info("Redirecting to sign-in", extra={"route": requested})
            self.page.go(LOGIN_ROUTE)
            return

        # Observers of the outgoing view must not repaint a detached tree.
        self.context.run_view_cleanups()
        try:
            view = self.routes[route](self.context, self.page)
        except Exception as exc:
            logger.error("View build failed", exc_info=True, extra={"route": route})
            self.show_error(f"Could not open this screen: {exc}")
            return
        self._show(view)

    def _show(self, view: ft.View) -> None:
        # Single-view stack: the new view replaces whatever was on top.
        if self.page.views:
            self.page.views[-1] = view
        else:
            self.page.views.append(view)
        self.page.update()

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Back navigation returns to the view below, or the dashboard."""
        self.page.views.pop()
        self.page.go(self.page.views[-1].route if self.page.views else HOME_ROUTE)

    def show_error(self, message: str) -> None:
        dialog = ft.AlertDialog(
            title=ft.Text("Something went wrong"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.page.close(dialog))],
        )
        open_dialog(self.page, dialog)
