"""Breakdown of a single month from the balance history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import flet as ft

from ...services.balances import ZERO, MonthlyBalance, month_key
from ..components import build_app_bar, build_card, empty_state, format_money

if TYPE_CHECKING:
    from ..context import AppContext


def _line(label: str, value: str, *, caption: str | None = None, color: str | None = None) -> ft.Row:
    left: list[ft.Control] = [ft.Text(label, weight=ft.FontWeight.W_500)]
    if caption:
        left.append(ft.Text(caption, size=12, color=ft.Colors.ON_SURFACE_VARIANT))
    return ft.Row(
        [ft.Column(left, spacing=2, expand=True), ft.Text(value, color=color)],
        vertical_alignment=ft.CrossAxisAlignment.CENTER,
    )


def _section(title: str, rows: list[ft.Control], empty_message: str) -> ft.Card:
    return build_card(title, ft.Column(rows or [empty_state(empty_message)], spacing=8))


def build_month_detail_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Summary, incomes, expenses, cards and savings for ``ctx.selected_month``."""

    vm = ctx.ensure_finance_vm()
    if ctx.selected_month is None:
        page.go("/dashboard")
        return ft.View(route="/month", controls=[ft.Text("Redirecting...")])

    month = month_key(ctx.selected_month)
    symbol = ctx.config.CURRENCY_SYMBOL

    def money(value) -> str:
        return format_money(value, symbol)

    summary = next(
        (entry for entry in vm.monthly_balance_history if entry.month == month),
        None,
    )
    if summary is None:
        # Month emptied since it was selected (e.g. its records were deleted).
        summary = MonthlyBalance(
            month=month,
            income=ZERO,
            variable_expenses=ZERO,
            fixed_expenses=sum((e.amount for e in vm.all_fixed_expenses), ZERO),
        )

    def date_text(moment) -> str:
        return moment.strftime("%Y-%m-%d")

    sections: list[Callable[[], ft.Control]] = [
        lambda: _section(
            "Summary",
            [
                _line("Income", money(summary.income)),
                _line("Expenses", money(summary.expenses), color=ft.Colors.ON_SURFACE_VARIANT),
                _line(
                    "Final balance",
                    money(summary.balance),
                    color=ft.Colors.RED if summary.balance < 0 else ft.Colors.GREEN,
                ),
            ],
            "",
        ),
        lambda: _section(
            "Income",
            [_line(date_text(p.date), money(p.amount)) for p in vm.paychecks_for_month(month)],
            "No income recorded this month.",
        ),
        lambda: _section(
            "Variable expenses",
            [
                _line(e.name, money(e.amount), caption=date_text(e.date))
                for e in vm.variable_expenses_for_month(month)
            ],
            "No variable expenses this month.",
        ),
        lambda: _section(
            "Fixed expenses",
            [
                _line(e.name, money(e.amount), caption=f"Day {e.day_of_month}")
                for e in vm.fixed_expenses_for_month(month)
            ],
            "No fixed expenses this month.",
        ),
        lambda: _section(
            "Credit cards",
            [
                _line(
                    c.name,
                    money(c.current_debt),
                    caption=f"Closes day {c.closing_day} - due day {c.payment_due_day}",
                    color=ft.Colors.RED if c.current_debt > 0 else None,
                )
                for c in vm.credit_cards_for_month(month)
            ],
            "No card payments this month.",
        ),
        lambda: _section(
            "Savings",
            [_line("Update", money(s.amount), caption=date_text(s.date)) for s in vm.savings_for_month(month)],
            "No savings activity this month.",
        ),
    ]

    return ft.View(
        route="/month",
        appbar=build_app_bar(ctx, page, summary.display_month, show_back=True),
        controls=[
            ft.Container(
                content=ft.Column([build() for build in sections], spacing=12, scroll=ft.ScrollMode.AUTO),
                padding=20,
                expand=True,
            )
        ],
        padding=0,
    )
