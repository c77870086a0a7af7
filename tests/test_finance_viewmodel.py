"""Tests for the dashboard view-model: form actions and live totals."""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal

import pytest

from fintro.services.pay_periods import Period
from fintro.viewmodels import FinanceViewModel


@pytest.fixture
def vm(store, clock):
    model = FinanceViewModel(store, clock=clock)
    model.start()
    yield model
    model.stop()


def _fill_period(vm: FinanceViewModel) -> None:
    vm.paycheck_amount = "2000"
    assert vm.add_paycheck()
    vm.expense_name = "Groceries"
    vm.expense_amount = "120.5"
    assert vm.add_variable_expense()
    vm.fixed_expense_name = "Rent"
    vm.fixed_expense_amount = "800"
    vm.fixed_expense_day = "15"
    assert vm.add_fixed_expense()
    vm.card_name = "Visa"
    vm.card_debt = "300"
    vm.card_closing_day = "5"
    vm.card_payment_day = "20"
    assert vm.add_credit_card()


def test_initial_state(vm):
    assert vm.current_period is Period.FIRST
    assert vm.period_name == "Pay 1 (expenses 14-28)"
    assert vm.all_paychecks == []
    assert vm.remaining_balance == Decimal("0")
    assert vm.monthly_balance_history == []


def test_period_totals_end_to_end(vm):
    _fill_period(vm)

    assert vm.current_paycheck_amount == Decimal("2000")
    assert [e.name for e in vm.variable_expenses_for_current_period] == ["Groceries"]
    assert vm.total_period_expenses == Decimal("920.50")
    assert vm.total_credit_card_debt == Decimal("300")
    assert vm.remaining_balance == Decimal("779.50")
    # Form fields are cleared after each successful write.
    assert vm.paycheck_amount == ""
    assert vm.expense_name == vm.expense_amount == ""
    assert vm.fixed_expense_day == ""
    assert vm.card_payment_day == ""


def test_switching_period_changes_filters(vm):
    _fill_period(vm)
    vm.set_period(Period.SECOND)

    assert vm.fixed_expenses_for_current_period == []
    assert vm.credit_cards_for_current_period == []
    assert vm.variable_expenses_for_current_period == []
    assert vm.remaining_balance == Decimal("2000")


def test_delete_recomputes_totals(vm):
    _fill_period(vm)

    assert vm.delete_variable_expenses([0]) == 1
    assert vm.all_variable_expenses == []
    assert vm.remaining_balance == Decimal("900")

    assert vm.delete_fixed_expenses([0]) == 1
    assert vm.delete_credit_cards([0, 5]) == 1
    assert vm.remaining_balance == Decimal("2000")


@pytest.mark.parametrize(
    "amount,message",
    [
        ("", "Amount is required"),
        ("abc", "Amount must be a number"),
        ("-5", "Amount cannot be negative"),
        ("NaN", "Amount must be a number"),
    ],
)
def test_invalid_expense_amount_is_rejected(vm, amount, message):
    vm.expense_name = "Lunch"
    vm.expense_amount = amount

    assert vm.add_variable_expense() is False
    assert vm.form_error == message
    assert vm.all_variable_expenses == []
    assert vm.expense_name == "Lunch"


def test_invalid_days_are_rejected(vm):
    vm.fixed_expense_name = "Rent"
    vm.fixed_expense_amount = "800"
    vm.fixed_expense_day = "32"
    assert vm.add_fixed_expense() is False
    assert vm.form_error == "Day must be between 1 and 31"

    vm.card_name = "Visa"
    vm.card_debt = "10"
    vm.card_closing_day = "x"
    vm.card_payment_day = "3"
    assert vm.add_credit_card() is False
    assert vm.form_error == "Closing day must be a whole number"
    assert vm.all_fixed_expenses == [] and vm.all_credit_cards == []


def test_amounts_are_rounded_to_cents(vm):
    vm.paycheck_amount = "1234.567"
    vm.add_paycheck()
    assert vm.current_paycheck_amount == Decimal("1234.57")


def test_prefill_paycheck_amount(vm):
    vm.prefill_paycheck_amount()
    assert vm.paycheck_amount == ""

    vm.paycheck_amount = "2000"
    vm.add_paycheck()
    vm.prefill_paycheck_amount()
    assert vm.paycheck_amount == "2000"


def test_prefill_saving_amount(vm):
    vm.saving_amount = "stale"
    vm.prefill_saving_amount()
    assert vm.saving_amount == ""

    vm.saving_amount = "1250.5"
    vm.add_or_update_saving()
    vm.prefill_saving_amount()
    assert vm.saving_amount == "1250.5"


def test_add_or_update_saving_keeps_a_single_record(vm, clock):
    vm.saving_amount = "500"
    assert vm.add_or_update_saving()
    first_id = vm.all_savings[0].id

    clock.now = datetime(2026, 10, 25, 9, 0)
    vm.saving_amount = "750.25"
    assert vm.add_or_update_saving()

    assert len(vm.all_savings) == 1
    assert vm.all_savings[0].id == first_id
    assert vm.current_savings_amount == Decimal("750.25")
    assert vm.all_savings[0].date == datetime(2026, 10, 25, 9, 0)
    assert vm.saving_amount == ""


def test_edit_variable_expense(vm):
    _fill_period(vm)
    original = vm.all_variable_expenses[0]

    vm.setup_editing_variable_expense(original)
    assert vm.expense_amount == "120.5"
    vm.expense_name = "Supermarket"
    vm.expense_amount = "99.99"
    assert vm.update_variable_expense()

    edited = vm.all_variable_expenses[0]
    assert edited.id == original.id
    assert edited.name == "Supermarket"
    assert edited.amount == Decimal("99.99")
    assert edited.date == original.date
    assert vm.expense_to_edit is None
    assert vm.total_period_expenses == Decimal("899.99")


def test_edit_fixed_expense_and_card(vm):
    _fill_period(vm)

    vm.setup_editing_fixed_expense(vm.all_fixed_expenses[0])
    assert vm.fixed_expense_day == "15"
    vm.fixed_expense_day = "2"
    assert vm.update_fixed_expense()
    assert vm.fixed_expenses_for_current_period == []

    vm.setup_editing_card(vm.all_credit_cards[0])
    assert (vm.card_name, vm.card_debt) == ("Visa", "300")
    vm.card_debt = "0"
    assert vm.update_credit_card()
    assert vm.all_credit_cards[0].current_debt == Decimal("0")
    assert vm.card_to_edit is None


def test_update_without_edit_target_does_nothing(vm):
    assert vm.update_variable_expense() is False
    assert vm.update_fixed_expense() is False
    assert vm.update_credit_card() is False


def test_clear_and_dismiss_editing(vm):
    _fill_period(vm)
    vm.setup_editing_variable_expense(vm.all_variable_expenses[0])
    vm.setup_editing_card(vm.all_credit_cards[0])

    vm.clear_and_dismiss_editing()

    assert vm.expense_to_edit is None and vm.card_to_edit is None
    assert vm.expense_amount == "" and vm.card_name == ""


def test_failed_write_is_logged_and_swallowed(vm, store, monkeypatch, caplog):
    def fail(*_args, **_kwargs):
        raise RuntimeError("storage offline")

    monkeypatch.setattr(store, "save_expense", fail)
    vm.expense_name = "Taxi"
    vm.expense_amount = "20"

    with caplog.at_level(logging.WARNING, logger="fintro"):
        assert vm.add_variable_expense() is True

    assert vm.all_variable_expenses == []
    assert "Could not add variable expense" in caplog.text


def test_writes_skipped_when_signed_out(vm, signed_in_auth):
    signed_in_auth.sign_out()
    vm.paycheck_amount = "100"
    assert vm.add_paycheck() is False


def test_writes_go_through_dispatcher(store, clock):
    queued = []
    model = FinanceViewModel(store, clock=clock, dispatch=queued.append)
    model.start()
    model.paycheck_amount = "1500"

    assert model.add_paycheck()
    assert model.all_paychecks == []
    assert model.paycheck_amount == "1500"

    queued.pop()()
    assert model.current_paycheck_amount == Decimal("1500")
    assert model.paycheck_amount == ""
    model.stop()


def test_observers_notified_on_snapshots(vm):
    calls = []
    remove = vm.add_observer(lambda: calls.append(1))
    vm.paycheck_amount = "10"
    vm.add_paycheck()
    assert calls

    remove()
    count = len(calls)
    vm.set_period(Period.SECOND)
    assert len(calls) == count


def test_start_is_idempotent_and_stop_detaches(vm, store):
    vm.start()
    assert store.change_feed.listener_count("paychecks", store.auth.require_user_id()) == 1
    vm.stop()
    store.save_paycheck(Decimal("10"))
    assert vm.all_paychecks == []


def test_history_and_month_accessors(vm, clock):
    _fill_period(vm)
    month = vm.monthly_balance_history[0].month

    assert vm.monthly_balance_history[0].balance == Decimal("1079.50")
    assert len(vm.paychecks_for_month(month)) == 1
    assert len(vm.variable_expenses_for_month(month)) == 1
    assert len(vm.fixed_expenses_for_month(month)) == 1
    assert len(vm.credit_cards_for_month(month)) == 1
    assert vm.savings_for_month(month) == []


def test_dated_records_are_stored(vm, store, clock, caplog):
    vm.expense_name = "Lunch"
    vm.expense_amount = "12.50"
    vm.paycheck_amount = "2000"
    vm.saving_amount = "300"

    with caplog.at_level(logging.WARNING, logger="fintro"):
        assert vm.add_variable_expense()
        assert vm.add_paycheck()
        assert vm.add_or_update_saving()

    assert "Could not" not in caplog.text
    (expense,) = store.expenses.list()
    assert expense.amount == Decimal("12.50")
    assert expense.date == clock.now
    assert expense.date.tzinfo is None
    assert len(store.paychecks.list()) == 1
    assert len(store.savings.list()) == 1


def test_concurrent_deletes_leave_no_stale_snapshot(store, clock, monkeypatch):
    store.save_expense("Coffee", Decimal("4.50"))
    store.save_expense("Taxi", Decimal("20"))

    executor = ThreadPoolExecutor(max_workers=2)
    model = FinanceViewModel(store, clock=clock, dispatch=executor.submit)
    model.start()
    assert len(model.all_variable_expenses) == 2

    repository = store.expenses.repository
    list_all = repository.list_all
    fetches = []

    def slow_first_fetch(*args, **kwargs):
        snapshot = list_all(*args, **kwargs)
        fetches.append(len(snapshot))
        if len(fetches) == 1:
            # Hold the older snapshot while the second delete lands.
            time.sleep(0.3)
        return snapshot

    monkeypatch.setattr(repository, "list_all", slow_first_fetch)

    assert model.delete_variable_expenses([0, 1]) == 2
    executor.shutdown(wait=True)

    assert store.expenses.list() == []
    assert model.all_variable_expenses == []
    assert model.total_period_expenses == Decimal("0")
    model.stop()


def test_snapshots_and_field_clears_run_on_posting_thread(store, clock):
    posted = []
    writer = ThreadPoolExecutor(max_workers=1)
    model = FinanceViewModel(store, clock=clock, dispatch=writer.submit, post=posted.append)
    model.start()
    while posted:
        posted.pop(0)()

    observer_threads = []
    model.add_observer(lambda: observer_threads.append(threading.get_ident()))
    model.paycheck_amount = "1500"
    assert model.add_paycheck()
    writer.shutdown(wait=True)

    # The write landed, but nothing touched view-model state off this thread.
    assert len(store.paychecks.list()) == 1
    assert model.all_paychecks == []
    assert model.paycheck_amount == "1500"
    assert observer_threads == []

    while posted:
        posted.pop(0)()

    assert model.current_paycheck_amount == Decimal("1500")
    assert model.paycheck_amount == ""
    assert set(observer_threads) == {threading.get_ident()}
    model.stop()


def test_failing_field_clear_is_logged(vm, monkeypatch, caplog):
    def fail():
        raise RuntimeError("form gone")

    monkeypatch.setattr(vm, "clear_paycheck_fields", fail)
    vm.paycheck_amount = "900"

    with caplog.at_level(logging.WARNING, logger="fintro"):
        assert vm.add_paycheck()

    assert vm.current_paycheck_amount == Decimal("900")
    assert "Could not finish add paycheck" in caplog.text
