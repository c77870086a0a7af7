"""Dialog helpers."""

from __future__ import annotations

import flet as ft


def open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    page.open(dialog)


def close_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    page.close(dialog)
