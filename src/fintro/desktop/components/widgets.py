"""Reusable widget components for the desktop app."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

import flet as ft


def format_money(value: Decimal | float, symbol: str = "$") -> str:
    """Format an amount with grouping and two decimals, sign before symbol."""

    amount = Decimal(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def build_card(
    title: str,
    content: ft.Control,
    actions: Optional[list[ft.Control]] = None,
) -> ft.Card:
    """Build a titled card section."""

    header = ft.Container(
        content=ft.Row(
            [ft.Text(title, size=16, weight=ft.FontWeight.BOLD), *(actions or [])],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        ),
        padding=ft.padding.only(left=16, right=8, top=12, bottom=4),
    )
    return ft.Card(
        content=ft.Column(
            [header, ft.Divider(height=1), ft.Container(content=content, padding=12)],
            spacing=0,
        ),
        elevation=2,
    )


def build_stat_card(
    label: str,
    value: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
) -> ft.Container:
    """Small label/value tile used inside the summary card."""

    row: list[ft.Control] = []
    if icon:
        row.append(ft.Icon(icon, size=18, color=color or ft.Colors.ON_SURFACE_VARIANT))
    row.append(ft.Text(label, size=12, color=ft.Colors.ON_SURFACE_VARIANT))
    return ft.Container(
        content=ft.Column(
            [ft.Row(row, spacing=4), ft.Text(value, size=16, weight=ft.FontWeight.W_600, color=color)],
            spacing=2,
        ),
        expand=True,
    )


def empty_state(message: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(message, color=ft.Colors.ON_SURFACE_VARIANT, italic=True),
        padding=8,
    )
