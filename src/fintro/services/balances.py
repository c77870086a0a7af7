"""Pay period and monthly balance aggregation.

All functions are pure: they take record snapshots and return totals, so the
view-model can recompute them after every snapshot without touching storage.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence, TypeVar

from ..models import CreditCard, Expense, FixedExpense, Paycheck, Saving
from .pay_periods import Period, classify, period_date_range

ZERO = Decimal("0")

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DatedT = TypeVar("DatedT", Paycheck, Saving, Expense)


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def most_recent(records: Iterable[DatedT]) -> Optional[DatedT]:
    """Return the record with the latest ``date`` or None."""
    return max(records, key=lambda record: record.date, default=None)


def current_paycheck_amount(paychecks: Iterable[Paycheck]) -> Decimal:
    latest = most_recent(paychecks)
    return latest.amount if latest is not None else ZERO


def current_savings_amount(savings: Iterable[Saving]) -> Decimal:
    latest = most_recent(savings)
    return latest.amount if latest is not None else ZERO


def fixed_expenses_for_period(
    fixed_expenses: Iterable[FixedExpense], period: Period
) -> list[FixedExpense]:
    """Fixed expenses whose pay day belongs to ``period``."""
    return [expense for expense in fixed_expenses if classify(expense.day_of_month) is period]


def variable_expenses_for_period(
    expenses: Iterable[Expense], period: Period, *, reference: datetime
) -> list[Expense]:
    """Variable expenses dated inside the period's window around ``reference``."""
    window = period_date_range(reference, period)
    if window is None:
        return []
    return [expense for expense in expenses if expense.date in window]


def credit_cards_for_period(cards: Iterable[CreditCard], period: Period) -> list[CreditCard]:
    """Cards whose payment falls due in ``period``."""
    return [card for card in cards if classify(card.payment_due_day) is period]


def total_period_expenses(
    fixed_expenses: Iterable[FixedExpense], variable_expenses: Iterable[Expense]
) -> Decimal:
    return _total(e.amount for e in fixed_expenses) + _total(e.amount for e in variable_expenses)


def total_credit_card_debt(cards: Iterable[CreditCard]) -> Decimal:
    return _total(card.current_debt for card in cards)


def remaining_balance(
    paycheck_amount: Decimal, period_expenses: Decimal, card_debt: Decimal
) -> Decimal:
    return paycheck_amount - period_expenses - card_debt


@dataclass(frozen=True, slots=True)
class PeriodSummary:
    """Everything the dashboard shows for one pay period."""

    period: Period
    paycheck_amount: Decimal
    fixed_expenses: list[FixedExpense]
    variable_expenses: list[Expense]
    credit_cards: list[CreditCard]

    @property
    def total_expenses(self) -> Decimal:
        return total_period_expenses(self.fixed_expenses, self.variable_expenses)

    @property
    def total_credit_card_debt(self) -> Decimal:
        return total_credit_card_debt(self.credit_cards)

    @property
    def remaining_balance(self) -> Decimal:
        return remaining_balance(self.paycheck_amount, self.total_expenses, self.total_credit_card_debt)


def summarize_period(
    *,
    period: Period,
    reference: datetime,
    paychecks: Sequence[Paycheck],
    expenses: Sequence[Expense],
    fixed_expenses: Sequence[FixedExpense],
    credit_cards: Sequence[CreditCard],
) -> PeriodSummary:
    """Filter every collection down to ``period`` and bundle the results."""

    return PeriodSummary(
        period=period,
        paycheck_amount=current_paycheck_amount(paychecks),
        fixed_expenses=fixed_expenses_for_period(fixed_expenses, period),
        variable_expenses=variable_expenses_for_period(expenses, period, reference=reference),
        credit_cards=credit_cards_for_period(credit_cards, period),
    )


@dataclass(frozen=True, slots=True)
class MonthlyBalance:
    """Income and spending for one calendar month."""

    month: date
    income: Decimal
    variable_expenses: Decimal
    fixed_expenses: Decimal

    @property
    def expenses(self) -> Decimal:
        return self.variable_expenses + self.fixed_expenses

    @property
    def balance(self) -> Decimal:
        return self.income - self.variable_expenses - self.fixed_expenses

    @property
    def display_month(self) -> str:
        return f"{MONTH_NAMES[self.month.month - 1]} {self.month.year}"


def month_key(moment: datetime | date) -> date:
    """Normalize a date/instant to the first day of its month."""
    return date(moment.year, moment.month, 1)


def monthly_balance_history(
    *,
    paychecks: Iterable[Paycheck],
    expenses: Iterable[Expense],
    fixed_expenses: Iterable[FixedExpense],
) -> list[MonthlyBalance]:
    """Per-month income vs. spending, newest month first.

    Months come from the union of paycheck and variable expense dates. The
    fixed expense total is the sum of every fixed expense and is charged
    identically to every month.
    """

    income: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for paycheck in paychecks:
        income[month_key(paycheck.date)] += paycheck.amount

    spending: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for expense in expenses:
        spending[month_key(expense.date)] += expense.amount

    fixed_total = _total(expense.amount for expense in fixed_expenses)
    months = set(income) | set(spending)
    return [
        MonthlyBalance(
            month=month,
            income=income.get(month, ZERO),
            variable_expenses=spending.get(month, ZERO),
            fixed_expenses=fixed_total,
        )
        for month in sorted(months, reverse=True)
    ]


def _in_month(records: Iterable[DatedT], month: date) -> list[DatedT]:
    key = month_key(month)
    return [record for record in records if month_key(record.date) == key]


def paychecks_for_month(paychecks: Iterable[Paycheck], month: date) -> list[Paycheck]:
    return _in_month(paychecks, month)


def variable_expenses_for_month(expenses: Iterable[Expense], month: date) -> list[Expense]:
    return _in_month(expenses, month)


def savings_for_month(savings: Iterable[Saving], month: date) -> list[Saving]:
    return _in_month(savings, month)


def fixed_expenses_for_month(fixed_expenses: Iterable[FixedExpense], month: date) -> list[FixedExpense]:
    """Every fixed expense; they recur monthly, matching the history total."""
    return list(fixed_expenses)


def credit_cards_for_month(cards: Iterable[CreditCard], month: date) -> list[CreditCard]:
    """Every card; cards carry no date of their own."""
    return list(cards)
