"""Flet views for the desktop app."""

from .auth import build_auth_view, build_register_view
from .dashboard import build_dashboard_view
from .month_detail import build_month_detail_view

__all__ = [
    "build_auth_view",
    "build_dashboard_view",
    "build_month_detail_view",
    "build_register_view",
]
