#!/usr/bin/env python
"""Desktop app entrypoint for Fintro."""

import flet as ft

from fintro.desktop.app import main

if __name__ == "__main__":
    ft.app(target=main)
