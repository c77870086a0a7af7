"""Reusable UI components for the desktop app."""

from .dialogs import close_dialog, open_dialog
from .layout import build_app_bar
from .widgets import build_card, build_stat_card, empty_state, format_money

__all__ = [
    "build_app_bar",
    "build_card",
    "build_stat_card",
    "close_dialog",
    "empty_state",
    "format_money",
    "open_dialog",
]
