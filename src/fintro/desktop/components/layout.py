"""Layout components for the desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import flet as ft

if TYPE_CHECKING:
    from ..context import AppContext


def build_app_bar(
    ctx: AppContext,
    page: ft.Page,
    title: str,
    *,
    actions: Optional[list[ft.Control]] = None,
    show_back: bool = False,
) -> ft.AppBar:
    """App bar with the signed-in user chip and a logout button."""

    def _logout(_e):
        ctx.auth_vm.logout()
        page.go("/login")

    trailing: list[ft.Control] = list(actions or [])
    user = ctx.auth.current_user
    if user is not None:
        trailing.extend(
            [
                ft.Chip(
                    label=ft.Text(user.display_name or user.email),
                    leading=ft.Icon(ft.Icons.PERSON),
                ),
                ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Sign out", on_click=_logout),
            ]
        )

    leading = (
        ft.IconButton(icon=ft.Icons.ARROW_BACK, tooltip="Back", on_click=lambda _: page.go("/dashboard"))
        if show_back
        else ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET)
    )
    return ft.AppBar(
        leading=leading,
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        center_title=False,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=trailing,
    )
