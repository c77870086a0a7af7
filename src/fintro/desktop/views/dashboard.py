"""Dashboard view: pay period summary, period lists, savings and history."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

import flet as ft

from ...services.balances import MonthlyBalance
from ...services.pay_periods import Period
from ...viewmodels import FinanceViewModel
from ..charts import discard_chart, monthly_balance_chart_png
from ..components import build_app_bar, build_card, build_stat_card, empty_state, format_money
from . import forms

if TYPE_CHECKING:
    from ..context import AppContext


def _record_row(
    title: str,
    badge: str,
    amount: str,
    *,
    on_edit: Callable,
    on_delete: Callable,
    amount_color: Optional[str] = None,
    subtitle: Optional[str] = None,
) -> ft.Container:
    text_column: list[ft.Control] = [ft.Text(title, weight=ft.FontWeight.W_500)]
    if subtitle:
        text_column.append(ft.Text(subtitle, size=12, color=ft.Colors.ON_SURFACE_VARIANT))
    return ft.Container(
        content=ft.Row(
            [
                ft.Column(text_column, spacing=2, expand=True),
                ft.Container(
                    content=ft.Text(badge, size=12),
                    bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
                    border_radius=12,
                    padding=ft.padding.symmetric(horizontal=8, vertical=2),
                ),
                ft.Text(amount, width=120, text_align=ft.TextAlign.RIGHT, color=amount_color),
                ft.IconButton(icon=ft.Icons.EDIT, tooltip="Edit", on_click=on_edit),
                ft.IconButton(icon=ft.Icons.DELETE_OUTLINE, tooltip="Delete", on_click=on_delete),
            ],
            vertical_alignment=ft.CrossAxisAlignment.CENTER,
        ),
        padding=ft.padding.symmetric(vertical=2),
        border=ft.border.only(bottom=ft.border.BorderSide(1, ft.Colors.OUTLINE_VARIANT)),
    )


def _summary_card(vm: FinanceViewModel, money: Callable, on_click: Callable) -> ft.Container:
    remaining = vm.remaining_balance
    return ft.Container(
        content=ft.Column(
            [
                ft.Text("Estimated final balance", size=14, color=ft.Colors.ON_SURFACE_VARIANT),
                ft.Text(
                    money(remaining),
                    size=36,
                    weight=ft.FontWeight.BOLD,
                    color=ft.Colors.GREEN if remaining >= 0 else ft.Colors.RED,
                ),
                ft.Row(
                    [
                        build_stat_card("Income", money(vm.current_paycheck_amount), ft.Icons.ARROW_DOWNWARD),
                        build_stat_card(
                            f"Expenses ({vm.current_period.short_name})",
                            money(vm.total_period_expenses),
                            ft.Icons.ARROW_UPWARD,
                        ),
                        build_stat_card(
                            f"Cards due ({vm.current_period.short_name})",
                            money(vm.total_credit_card_debt),
                            ft.Icons.CREDIT_CARD,
                            color=ft.Colors.RED if vm.total_credit_card_debt > 0 else None,
                        ),
                    ],
                    spacing=16,
                ),
                ft.Text("Tap to update income", size=11, color=ft.Colors.ON_SURFACE_VARIANT),
            ],
            spacing=6,
        ),
        padding=20,
        border_radius=16,
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        on_click=on_click,
    )


def _period_picker(vm: FinanceViewModel) -> ft.RadioGroup:
    def on_change(e):
        vm.set_period(Period(e.control.value))

    return ft.RadioGroup(
        value=vm.current_period.value,
        on_change=on_change,
        content=ft.Row(
            [ft.Radio(value=period.value, label=period.display_name) for period in Period],
            spacing=24,
        ),
    )


def _overview_section(vm: FinanceViewModel, page: ft.Page, money: Callable) -> ft.Column:
    cards = vm.credit_cards_for_current_period
    card_rows: list[ft.Control] = [
        _record_row(
            card.name,
            f"Due day {card.payment_due_day}",
            money(card.current_debt),
            subtitle=f"Closes day {card.closing_day}",
            amount_color=ft.Colors.RED if card.current_debt > 0 else None,
            on_edit=lambda _, c=card: forms.open_card_dialog(page, vm, c),
            on_delete=lambda _, c=card: vm.delete_credit_cards([vm.all_credit_cards.index(c)]),
        )
        for card in cards
    ] or [empty_state("No cards due this period.")]

    fixed = vm.fixed_expenses_for_current_period
    fixed_rows: list[ft.Control] = [
        _record_row(
            expense.name,
            f"Day {expense.day_of_month}",
            money(expense.amount),
            on_edit=lambda _, e=expense: forms.open_fixed_expense_dialog(page, vm, e),
            on_delete=lambda _, i=index: vm.delete_fixed_expenses([i]),
        )
        for index, expense in enumerate(fixed)
    ] or [empty_state("No fixed expenses this period.")]

    variable = vm.variable_expenses_for_current_period
    variable_rows: list[ft.Control] = [
        _record_row(
            expense.name,
            expense.date.strftime("%Y-%m-%d"),
            money(expense.amount),
            on_edit=lambda _, e=expense: forms.open_variable_expense_dialog(page, vm, e),
            on_delete=lambda _, i=index: vm.delete_variable_expenses([i]),
        )
        for index, expense in enumerate(variable)
    ] or [empty_state("No variable expenses this period.")]

    return ft.Column(
        [
            build_card(
                "Credit cards",
                ft.Column(card_rows, spacing=0),
                actions=[ft.IconButton(icon=ft.Icons.ADD, tooltip="Add card",
                                       on_click=lambda _: forms.open_card_dialog(page, vm))],
            ),
            build_card(
                "Fixed expenses this period",
                ft.Column(fixed_rows, spacing=0),
                actions=[ft.IconButton(icon=ft.Icons.ADD, tooltip="Add fixed expense",
                                       on_click=lambda _: forms.open_fixed_expense_dialog(page, vm))],
            ),
            build_card(
                "Variable expenses this period",
                ft.Column(variable_rows, spacing=0),
                actions=[ft.IconButton(icon=ft.Icons.ADD, tooltip="Add variable expense",
                                       on_click=lambda _: forms.open_variable_expense_dialog(page, vm))],
            ),
        ],
        spacing=12,
        scroll=ft.ScrollMode.AUTO,
    )


def _savings_section(vm: FinanceViewModel, page: ft.Page, money: Callable) -> ft.Column:
    savings_card = ft.Container(
        content=ft.Row(
            [
                ft.Column(
                    [
                        ft.Text("Current savings", size=14),
                        ft.Text(money(vm.current_savings_amount), size=24, weight=ft.FontWeight.BOLD),
                    ],
                    spacing=4,
                    expand=True,
                ),
                ft.Icon(ft.Icons.SAVINGS, color=ft.Colors.GREEN, size=32),
            ]
        ),
        padding=16,
        border_radius=16,
        bgcolor=ft.Colors.with_opacity(0.15, ft.Colors.GREEN),
    )
    return ft.Column(
        [
            savings_card,
            ft.FilledTonalButton(
                "Update savings",
                icon=ft.Icons.EDIT,
                on_click=lambda _: forms.open_savings_dialog(page, vm),
            ),
            ft.Text(
                "Savings are kept apart from the period summary.",
                size=12,
                color=ft.Colors.ON_SURFACE_VARIANT,
            ),
        ],
        spacing=12,
        scroll=ft.ScrollMode.AUTO,
    )


def _history_row(summary: MonthlyBalance, money: Callable, on_click: Callable) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            [
                ft.Row(
                    [
                        ft.Text(summary.display_month, weight=ft.FontWeight.BOLD, expand=True),
                        ft.Text(
                            money(summary.balance),
                            weight=ft.FontWeight.BOLD,
                            color=ft.Colors.RED if summary.balance < 0 else ft.Colors.GREEN,
                        ),
                    ]
                ),
                ft.Row(
                    [
                        ft.Icon(ft.Icons.ARROW_DOWNWARD, size=14),
                        ft.Text(money(summary.income), size=12),
                        ft.Icon(ft.Icons.ARROW_UPWARD, size=14),
                        ft.Text(money(summary.expenses), size=12, color=ft.Colors.ON_SURFACE_VARIANT),
                    ],
                    spacing=4,
                ),
            ],
            spacing=4,
        ),
        padding=10,
        on_click=on_click,
        border=ft.border.only(bottom=ft.border.BorderSide(1, ft.Colors.OUTLINE_VARIANT)),
    )


def _history_section(
    ctx: AppContext, vm: FinanceViewModel, page: ft.Page, money: Callable, chart_path: Path
) -> ft.Column:
    history = vm.monthly_balance_history

    def open_month(month):
        ctx.selected_month = month
        page.go("/month")

    rows: list[ft.Control] = [
        _history_row(summary, money, lambda _, m=summary.month: open_month(m)) for summary in history
    ] or [empty_state("No activity recorded yet.")]
    return ft.Column(
        [
            ft.Image(src=str(chart_path), fit=ft.ImageFit.CONTAIN),
            build_card("Monthly balance history", ft.Column(rows, spacing=0)),
        ],
        spacing=12,
        scroll=ft.ScrollMode.AUTO,
    )


def build_dashboard_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the dashboard and keep it in sync with the finance view-model."""

    vm = ctx.ensure_finance_vm()
    symbol = ctx.config.CURRENCY_SYMBOL

    def money(value) -> str:
        return format_money(value, symbol)

    body = ft.Column(spacing=16, expand=True)
    state: dict = {"tab": 0, "chart": None}

    def on_tab_change(e):
        state["tab"] = e.control.selected_index

    def render() -> None:
        previous_chart = state["chart"]
        state["chart"] = monthly_balance_chart_png(
            vm.monthly_balance_history, currency_symbol=symbol
        )
        body.controls = [
            _summary_card(vm, money, lambda _: forms.open_paycheck_dialog(page, vm)),
            _period_picker(vm),
            ft.Tabs(
                selected_index=state["tab"],
                on_change=on_tab_change,
                tabs=[
                    ft.Tab(text="Overview", content=_overview_section(vm, page, money)),
                    ft.Tab(text="Savings", content=_savings_section(vm, page, money)),
                    ft.Tab(text="History", content=_history_section(
                        ctx, vm, page, money, state["chart"]
                    )),
                ],
                expand=True,
            ),
        ]
        discard_chart(previous_chart)

    def on_change() -> None:
        render()
        page.update()

    render()
    ctx.view_cleanups.append(vm.add_observer(on_change))

    def discard_current_chart() -> None:
        discard_chart(state["chart"])
        state["chart"] = None

    ctx.view_cleanups.append(discard_current_chart)

    add_menu = ft.PopupMenuButton(
        icon=ft.Icons.ADD,
        tooltip="Add",
        items=[
            ft.PopupMenuItem(text="Add credit card", icon=ft.Icons.CREDIT_CARD,
                             on_click=lambda _: forms.open_card_dialog(page, vm)),
            ft.PopupMenuItem(text="Add fixed expense", icon=ft.Icons.PUSH_PIN,
                             on_click=lambda _: forms.open_fixed_expense_dialog(page, vm)),
            ft.PopupMenuItem(text="Add variable expense", icon=ft.Icons.SHOPPING_CART,
                             on_click=lambda _: forms.open_variable_expense_dialog(page, vm)),
        ],
    )

    return ft.View(
        route="/dashboard",
        appbar=build_app_bar(ctx, page, "Fintro", actions=[add_menu]),
        controls=[ft.Container(content=body, padding=20, expand=True)],
        padding=0,
    )
