"""Fintro pay-period budgeting application package."""

from __future__ import annotations

from .config import BaseConfig

__all__ = ["BaseConfig"]
