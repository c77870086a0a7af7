"""Sign-in and registration views."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext


def _branding(subtitle: str) -> list[ft.Control]:
    return [
        ft.Container(
            content=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET, size=64, color=ft.Colors.PRIMARY),
            alignment=ft.alignment.center,
        ),
        ft.Text("Fintro", size=32, weight=ft.FontWeight.BOLD, text_align=ft.TextAlign.CENTER),
        ft.Text(subtitle, size=16, color=ft.Colors.ON_SURFACE_VARIANT, text_align=ft.TextAlign.CENTER),
        ft.Container(height=24),
    ]


def _centered(route: str, controls: list[ft.Control]) -> ft.View:
    return ft.View(
        route=route,
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=controls,
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=8,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=20,
    )


def _redirect(route: str, page: ft.Page) -> ft.View:
    page.go("/dashboard")
    return ft.View(route=route, controls=[ft.Container(content=ft.Text("Redirecting..."), padding=20)])


def build_auth_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Email/password sign-in form bound to the auth view-model."""

    vm = ctx.auth_vm
    if vm.is_signed_in:
        return _redirect("/login", page)

    email_field = ft.TextField(label="Email", value=vm.email, autofocus=True, width=300)
    password_field = ft.TextField(
        label="Password", value=vm.password, password=True, can_reveal_password=True, width=300
    )
    error_text = ft.Text(vm.error_message or "", color=ft.Colors.ERROR, visible=bool(vm.error_message))

    def do_login(_e):
        vm.email = email_field.value or ""
        vm.password = password_field.value or ""
        if vm.login():
            page.go("/dashboard")
            return
        error_text.value = vm.error_message or ""
        error_text.visible = True
        page.update()

    email_field.on_submit = lambda _: password_field.focus()
    password_field.on_submit = do_login

    return _centered(
        "/login",
        [
            *_branding("Sign in to continue"),
            email_field,
            password_field,
            error_text,
            ft.Container(height=12),
            ft.FilledButton("Sign In", width=300, on_click=do_login),
            ft.TextButton("Create an account", on_click=lambda _: page.go("/register")),
        ],
    )


def build_register_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Account creation form; success signs the new user in."""

    vm = ctx.auth_vm
    if vm.is_signed_in:
        return _redirect("/register", page)

    name_field = ft.TextField(label="Full name", value=vm.full_name, autofocus=True, width=300)
    email_field = ft.TextField(label="Email", value=vm.email, width=300)
    password_field = ft.TextField(
        label="Password", password=True, can_reveal_password=True, width=300,
        helper_text="At least 6 characters",
    )
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def do_register(_e):
        vm.full_name = name_field.value or ""
        vm.email = email_field.value or ""
        vm.password = password_field.value or ""
        if vm.register():
            page.go("/dashboard")
            return
        error_text.value = vm.error_message or ""
        error_text.visible = True
        page.update()

    password_field.on_submit = do_register

    return _centered(
        "/register",
        [
            *_branding("Create your account"),
            name_field,
            email_field,
            password_field,
            error_text,
            ft.Container(height=12),
            ft.FilledButton("Sign Up", width=300, on_click=do_register),
            ft.TextButton("I already have an account", on_click=lambda _: page.go("/login")),
        ],
    )
