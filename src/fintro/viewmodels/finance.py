"""Dashboard state: live collections, pay period totals and form actions."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional, Sequence, TypeVar

from ..infra.realtime import Subscription
from ..logging_config import get_logger
from ..models import CreditCard, Expense, FixedExpense, Paycheck, Saving
from ..services import balances
from ..services.finance_store import FinanceStore
from ..services.pay_periods import Period, default_period
from .base import Dispatcher, ObservableViewModel, run_inline
from .validation import format_amount_input, parse_amount, parse_day

logger = get_logger(__name__)

T = TypeVar("T")


class FinanceViewModel(ObservableViewModel):
    """Mirror of the user's finance collections plus derived totals.

    Collections are replaced wholesale by store snapshots; every total is a
    property computed from them, so nothing goes stale after a delete.
    Writes are handed to ``dispatch`` and never block the caller; a failed
    write is logged and otherwise dropped. Snapshots and post-write field
    clears are handed to ``post``, which must run them on the thread that
    owns the view-model state (the UI thread in the desktop app).
    """

    def __init__(
        self,
        store: FinanceStore,
        *,
        clock: Callable[[], datetime] = datetime.now,
        dispatch: Dispatcher | None = None,
        post: Dispatcher | None = None,
    ):
        super().__init__()
        self.store = store
        self.clock = clock
        self._dispatch_task = dispatch or run_inline
        self._post = post or run_inline
        self._subscriptions: list[Subscription] = []

        self.all_paychecks: list[Paycheck] = []
        self.all_variable_expenses: list[Expense] = []
        self.all_fixed_expenses: list[FixedExpense] = []
        self.all_credit_cards: list[CreditCard] = []
        self.all_savings: list[Saving] = []

        # Day-of-month only; see pay_periods for how this can differ from
        # the date windows used to filter variable expenses.
        self.current_period: Period = default_period(self.clock().date())

        self.expense_to_edit: Optional[Expense] = None
        self.fixed_expense_to_edit: Optional[FixedExpense] = None
        self.card_to_edit: Optional[CreditCard] = None

        self.paycheck_amount = ""
        self.saving_amount = ""
        self.expense_name = ""
        self.expense_amount = ""
        self.fixed_expense_name = ""
        self.fixed_expense_amount = ""
        self.fixed_expense_day = ""
        self.card_name = ""
        self.card_debt = ""
        self.card_closing_day = ""
        self.card_payment_day = ""
        self.form_error: Optional[str] = None

    # ------------------------------------------------------------------
    # Listening
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Subscribe to every collection of the signed-in user."""

        if self._subscriptions:
            return
        self._subscriptions = [
            self.store.paychecks.listen(self._receiver("all_paychecks")),
            self.store.expenses.listen(self._receiver("all_variable_expenses")),
            self.store.fixed_expenses.listen(self._receiver("all_fixed_expenses")),
            self.store.credit_cards.listen(self._receiver("all_credit_cards")),
            self.store.savings.listen(self._receiver("all_savings")),
        ]
        logger.info("Finance listeners started")

    def stop(self) -> None:
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions = []

    def _receiver(self, attribute: str) -> Callable[[list], None]:
        def apply(snapshot: list) -> None:
            setattr(self, attribute, snapshot)
            self.notify_observers()

        def receive(snapshot: list) -> None:
            self._post(lambda: apply(snapshot))

        return receive

    def set_period(self, period: Period) -> None:
        self.current_period = Period(period)
        self.notify_observers()

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def period_name(self) -> str:
        return self.current_period.display_name

    @property
    def current_paycheck_amount(self) -> Decimal:
        return balances.current_paycheck_amount(self.all_paychecks)

    @property
    def current_savings_amount(self) -> Decimal:
        return balances.current_savings_amount(self.all_savings)

    @property
    def fixed_expenses_for_current_period(self) -> list[FixedExpense]:
        return balances.fixed_expenses_for_period(self.all_fixed_expenses, self.current_period)

    @property
    def variable_expenses_for_current_period(self) -> list[Expense]:
        return balances.variable_expenses_for_period(
            self.all_variable_expenses, self.current_period, reference=self.clock()
        )

    @property
    def credit_cards_for_current_period(self) -> list[CreditCard]:
        return balances.credit_cards_for_period(self.all_credit_cards, self.current_period)

    @property
    def total_period_expenses(self) -> Decimal:
        return balances.total_period_expenses(
            self.fixed_expenses_for_current_period, self.variable_expenses_for_current_period
        )

    @property
    def total_credit_card_debt(self) -> Decimal:
        return balances.total_credit_card_debt(self.credit_cards_for_current_period)

    @property
    def remaining_balance(self) -> Decimal:
        return balances.remaining_balance(
            self.current_paycheck_amount, self.total_period_expenses, self.total_credit_card_debt
        )

    @property
    def monthly_balance_history(self) -> list[balances.MonthlyBalance]:
        return balances.monthly_balance_history(
            paychecks=self.all_paychecks,
            expenses=self.all_variable_expenses,
            fixed_expenses=self.all_fixed_expenses,
        )

    def paychecks_for_month(self, month: date) -> list[Paycheck]:
        return balances.paychecks_for_month(self.all_paychecks, month)

    def variable_expenses_for_month(self, month: date) -> list[Expense]:
        return balances.variable_expenses_for_month(self.all_variable_expenses, month)

    def fixed_expenses_for_month(self, month: date) -> list[FixedExpense]:
        return balances.fixed_expenses_for_month(self.all_fixed_expenses, month)

    def credit_cards_for_month(self, month: date) -> list[CreditCard]:
        return balances.credit_cards_for_month(self.all_credit_cards, month)

    def savings_for_month(self, month: date) -> list[Saving]:
        return balances.savings_for_month(self.all_savings, month)

    # ------------------------------------------------------------------
    # Paychecks and savings
    # ------------------------------------------------------------------

    def prefill_paycheck_amount(self) -> None:
        amount = self.current_paycheck_amount
        self.paycheck_amount = format_amount_input(amount) if amount > 0 else ""

    def prefill_saving_amount(self) -> None:
        amount = self.current_savings_amount
        self.saving_amount = format_amount_input(amount) if amount > 0 else ""

    def add_paycheck(self) -> bool:
        amount = self._parse(lambda: parse_amount(self.paycheck_amount))
        if amount is None or not self._signed_in():
            return False
        self._dispatch(
            "add paycheck",
            lambda: self.store.save_paycheck(amount),
            after=self.clear_paycheck_fields,
        )
        return True

    def add_or_update_saving(self) -> bool:
        """Overwrite the newest savings record, or create the first one."""

        amount = self._parse(lambda: parse_amount(self.saving_amount))
        if amount is None or not self._signed_in():
            return False
        latest = balances.most_recent(self.all_savings)

        def write() -> None:
            if latest is None:
                self.store.save_saving(amount)
            else:
                self.store.savings.update(
                    Saving(id=latest.id, user_id=latest.user_id, amount=amount, date=self.clock())
                )

        self._dispatch("save savings", write, after=self.clear_saving_fields)
        return True

    # ------------------------------------------------------------------
    # Variable expenses
    # ------------------------------------------------------------------

    def add_variable_expense(self) -> bool:
        amount = self._parse(lambda: parse_amount(self.expense_amount))
        if amount is None or not self._signed_in():
            return False
        name = self.expense_name.strip()
        self._dispatch(
            "add variable expense",
            lambda: self.store.save_expense(name, amount),
            after=self.clear_variable_expense_fields,
        )
        return True

    def setup_editing_variable_expense(self, expense: Expense) -> None:
        self.expense_to_edit = expense
        self.expense_name = expense.name
        self.expense_amount = format_amount_input(expense.amount)
        self.form_error = None

    def update_variable_expense(self) -> bool:
        original = self.expense_to_edit
        if original is None:
            return False
        amount = self._parse(lambda: parse_amount(self.expense_amount))
        if amount is None:
            return False
        updated = Expense(
            id=original.id,
            user_id=original.user_id,
            name=self.expense_name.strip(),
            amount=amount,
            date=original.date,
        )
        self._dispatch(
            "update variable expense",
            lambda: self.store.expenses.update(updated),
            after=self.clear_and_dismiss_editing,
        )
        return True

    def delete_variable_expenses(self, offsets: Iterable[int]) -> int:
        """Delete by position in the current period's variable expense list."""
        return self._delete_at(
            "delete variable expense",
            self.variable_expenses_for_current_period,
            offsets,
            self.store.expenses.delete,
        )

    def clear_variable_expense_fields(self) -> None:
        self.expense_name = ""
        self.expense_amount = ""

    # ------------------------------------------------------------------
    # Fixed expenses
    # ------------------------------------------------------------------

    def add_fixed_expense(self) -> bool:
        parsed = self._parse(
            lambda: (parse_amount(self.fixed_expense_amount), parse_day(self.fixed_expense_day))
        )
        if parsed is None or not self._signed_in():
            return False
        amount, day = parsed
        expense = FixedExpense(name=self.fixed_expense_name.strip(), amount=amount, day_of_month=day)
        self._dispatch(
            "add fixed expense",
            lambda: self.store.fixed_expenses.create(expense),
            after=self.clear_fixed_expense_fields,
        )
        return True

    def setup_editing_fixed_expense(self, expense: FixedExpense) -> None:
        self.fixed_expense_to_edit = expense
        self.fixed_expense_name = expense.name
        self.fixed_expense_amount = format_amount_input(expense.amount)
        self.fixed_expense_day = str(expense.day_of_month)
        self.form_error = None

    def update_fixed_expense(self) -> bool:
        original = self.fixed_expense_to_edit
        if original is None:
            return False
        parsed = self._parse(
            lambda: (parse_amount(self.fixed_expense_amount), parse_day(self.fixed_expense_day))
        )
        if parsed is None:
            return False
        amount, day = parsed
        updated = FixedExpense(
            id=original.id,
            user_id=original.user_id,
            name=self.fixed_expense_name.strip(),
            amount=amount,
            day_of_month=day,
        )
        self._dispatch(
            "update fixed expense",
            lambda: self.store.fixed_expenses.update(updated),
            after=self.clear_and_dismiss_editing,
        )
        return True

    def delete_fixed_expenses(self, offsets: Iterable[int]) -> int:
        """Delete by position in the current period's fixed expense list."""
        return self._delete_at(
            "delete fixed expense",
            self.fixed_expenses_for_current_period,
            offsets,
            self.store.fixed_expenses.delete,
        )

    def clear_fixed_expense_fields(self) -> None:
        self.fixed_expense_name = ""
        self.fixed_expense_amount = ""
        self.fixed_expense_day = ""

    # ------------------------------------------------------------------
    # Credit cards
    # ------------------------------------------------------------------

    def _parse_card_form(self) -> Optional[tuple[Decimal, int, int]]:
        return self._parse(
            lambda: (
                parse_amount(self.card_debt, label="Debt"),
                parse_day(self.card_closing_day, label="Closing day"),
                parse_day(self.card_payment_day, label="Payment day"),
            )
        )

    def add_credit_card(self) -> bool:
        parsed = self._parse_card_form()
        if parsed is None or not self._signed_in():
            return False
        debt, closing_day, payment_day = parsed
        card = CreditCard(
            name=self.card_name.strip(),
            current_debt=debt,
            closing_day=closing_day,
            payment_due_day=payment_day,
        )
        self._dispatch(
            "add credit card",
            lambda: self.store.credit_cards.create(card),
            after=self.clear_card_fields,
        )
        return True

    def setup_editing_card(self, card: CreditCard) -> None:
        self.card_to_edit = card
        self.card_name = card.name
        self.card_debt = format_amount_input(card.current_debt)
        self.card_closing_day = str(card.closing_day)
        self.card_payment_day = str(card.payment_due_day)
        self.form_error = None

    def update_credit_card(self) -> bool:
        original = self.card_to_edit
        if original is None:
            return False
        parsed = self._parse_card_form()
        if parsed is None:
            return False
        debt, closing_day, payment_day = parsed
        updated = CreditCard(
            id=original.id,
            user_id=original.user_id,
            name=self.card_name.strip(),
            current_debt=debt,
            closing_day=closing_day,
            payment_due_day=payment_day,
        )
        self._dispatch(
            "update credit card",
            lambda: self.store.credit_cards.update(updated),
            after=self.clear_and_dismiss_editing,
        )
        return True

    def delete_credit_cards(self, offsets: Iterable[int]) -> int:
        """Delete by position in the full card list."""
        return self._delete_at(
            "delete credit card", self.all_credit_cards, offsets, self.store.credit_cards.delete
        )

    def clear_card_fields(self) -> None:
        self.card_name = ""
        self.card_debt = ""
        self.card_closing_day = ""
        self.card_payment_day = ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def clear_paycheck_fields(self) -> None:
        self.paycheck_amount = ""

    def clear_saving_fields(self) -> None:
        self.saving_amount = ""

    def clear_and_dismiss_editing(self) -> None:
        self.clear_variable_expense_fields()
        self.clear_fixed_expense_fields()
        self.clear_card_fields()
        self.expense_to_edit = None
        self.fixed_expense_to_edit = None
        self.card_to_edit = None
        self.form_error = None

    def _signed_in(self) -> bool:
        if self.store.auth.current_user is None:
            logger.warning("Write skipped: no signed-in user")
            return False
        return True

    def _parse(self, parse: Callable[[], T]) -> Optional[T]:
        try:
            value = parse()
        except ValueError as exc:
            self.form_error = str(exc)
            self.notify_observers()
            return None
        self.form_error = None
        return value

    def _dispatch(
        self,
        action: str,
        write: Callable[[], object],
        *,
        after: Callable[[], None] | None = None,
    ) -> None:
        def finish() -> None:
            try:
                after()
            except Exception:
                logger.warning(
                    f"Could not finish {action}", exc_info=True, extra={"action": action}
                )

        def task() -> None:
            try:
                write()
            except Exception:
                logger.warning(f"Could not {action}", exc_info=True, extra={"action": action})
            if after is not None:
                self._post(finish)

        self._dispatch_task(task)

    def _delete_at(
        self,
        action: str,
        records: Sequence,
        offsets: Iterable[int],
        delete: Callable[[str], object],
    ) -> int:
        targets = [records[offset] for offset in offsets if 0 <= offset < len(records)]
        dispatched = 0
        for record in targets:
            if not record.id:
                continue
            record_id = record.id
            self._dispatch(action, lambda record_id=record_id: delete(record_id))
            dispatched += 1
        return dispatched
