"""Add/edit dialogs bound to the finance view-model's form fields."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft

from ...models import CreditCard, Expense, FixedExpense
from ...viewmodels import FinanceViewModel
from ..components import close_dialog, open_dialog


def _bound_field(vm: FinanceViewModel, attribute: str, label: str, **kwargs) -> ft.TextField:
    """TextField whose edits are written straight to ``vm.<attribute>``."""

    def on_change(e):
        setattr(vm, attribute, e.control.value or "")

    return ft.TextField(label=label, value=getattr(vm, attribute), on_change=on_change, **kwargs)


def _amount_field(vm: FinanceViewModel, attribute: str, label: str) -> ft.TextField:
    return _bound_field(
        vm, attribute, label, hint_text="e.g. 1500.00", keyboard_type=ft.KeyboardType.NUMBER
    )


def _day_field(vm: FinanceViewModel, attribute: str, label: str) -> ft.TextField:
    return _bound_field(vm, attribute, label, hint_text="1-31", keyboard_type=ft.KeyboardType.NUMBER)


def _form_dialog(
    page: ft.Page,
    vm: FinanceViewModel,
    title: str,
    fields: list[ft.Control],
    save: Callable[[], bool],
    on_cancel: Optional[Callable[[], None]] = None,
) -> ft.AlertDialog:
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)

    def handle_save(_e):
        if save():
            close_dialog(page, dialog)
            return
        error_text.value = vm.form_error or "Please check the form"
        error_text.visible = True
        page.update()

    def handle_cancel(_e):
        if on_cancel is not None:
            on_cancel()
        close_dialog(page, dialog)

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Column([*fields, error_text], tight=True, spacing=12, width=360),
        actions=[
            ft.TextButton("Cancel", on_click=handle_cancel),
            ft.FilledButton("Save", on_click=handle_save),
        ],
    )
    open_dialog(page, dialog)
    return dialog


def open_paycheck_dialog(page: ft.Page, vm: FinanceViewModel) -> ft.AlertDialog:
    vm.prefill_paycheck_amount()
    return _form_dialog(
        page,
        vm,
        "Update income",
        [_amount_field(vm, "paycheck_amount", "Paycheck amount")],
        vm.add_paycheck,
        on_cancel=vm.clear_paycheck_fields,
    )


def open_savings_dialog(page: ft.Page, vm: FinanceViewModel) -> ft.AlertDialog:
    vm.prefill_saving_amount()
    return _form_dialog(
        page,
        vm,
        "Update savings",
        [_amount_field(vm, "saving_amount", "Savings amount")],
        vm.add_or_update_saving,
        on_cancel=vm.clear_saving_fields,
    )


def open_variable_expense_dialog(
    page: ft.Page, vm: FinanceViewModel, expense: Optional[Expense] = None
) -> ft.AlertDialog:
    if expense is not None:
        vm.setup_editing_variable_expense(expense)
    return _form_dialog(
        page,
        vm,
        "Edit expense" if expense is not None else "New variable expense",
        [
            _bound_field(vm, "expense_name", "Name"),
            _amount_field(vm, "expense_amount", "Amount"),
        ],
        vm.update_variable_expense if expense is not None else vm.add_variable_expense,
        on_cancel=vm.clear_and_dismiss_editing,
    )


def open_fixed_expense_dialog(
    page: ft.Page, vm: FinanceViewModel, expense: Optional[FixedExpense] = None
) -> ft.AlertDialog:
    if expense is not None:
        vm.setup_editing_fixed_expense(expense)
    return _form_dialog(
        page,
        vm,
        "Edit fixed expense" if expense is not None else "New fixed expense",
        [
            _bound_field(vm, "fixed_expense_name", "Name"),
            _amount_field(vm, "fixed_expense_amount", "Amount"),
            _day_field(vm, "fixed_expense_day", "Day of month"),
        ],
        vm.update_fixed_expense if expense is not None else vm.add_fixed_expense,
        on_cancel=vm.clear_and_dismiss_editing,
    )


def open_card_dialog(
    page: ft.Page, vm: FinanceViewModel, card: Optional[CreditCard] = None
) -> ft.AlertDialog:
    if card is not None:
        vm.setup_editing_card(card)
    return _form_dialog(
        page,
        vm,
        "Edit card" if card is not None else "New credit card",
        [
            _bound_field(vm, "card_name", "Card name"),
            _amount_field(vm, "card_debt", "Current debt"),
            _day_field(vm, "card_closing_day", "Closing day"),
            _day_field(vm, "card_payment_day", "Payment due day"),
        ],
        vm.update_credit_card if card is not None else vm.add_credit_card,
        on_cancel=vm.clear_and_dismiss_editing,
    )
