"""User-scoped data access for every finance collection.

``FinanceStore`` is the only thing view-models talk to for persistence. Each
sub-collection offers create, listen (full snapshot now and after every
change), update by id (full overwrite) and delete by id, always under the
signed-in user's id.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Generic, Optional, TypeVar

from sqlmodel import SQLModel

from ..infra.database import SessionFactory
from ..infra.realtime import ChangeFeed, SnapshotListener, Subscription
from ..infra.repositories import (
    SQLModelCreditCardRepository,
    SQLModelExpenseRepository,
    SQLModelFixedExpenseRepository,
    SQLModelPaycheckRepository,
    SQLModelRecordRepository,
    SQLModelSavingRepository,
)
from ..models import CreditCard, Expense, FixedExpense, Paycheck, Saving
from .auth import AuthService

RecordT = TypeVar("RecordT", bound=SQLModel)
Clock = Callable[[], datetime]


class RecordCollection(Generic[RecordT]):
    """One sub-collection bound to the signed-in user."""

    def __init__(
        self,
        repository: SQLModelRecordRepository[RecordT],
        auth: AuthService,
        change_feed: ChangeFeed,
    ):
        self.repository = repository
        self.auth = auth
        self.change_feed = change_feed

    @property
    def name(self) -> str:
        return self.repository.collection

    def create(self, record: RecordT) -> RecordT:
        return self.repository.create(record, user_id=self.auth.require_user_id())

    def update(self, record: RecordT) -> RecordT:
        return self.repository.update(record, user_id=self.auth.require_user_id())

    def delete(self, record_id: str) -> bool:
        return self.repository.delete(record_id, user_id=self.auth.require_user_id())

    def list(self) -> list[RecordT]:
        return self.repository.list_all(user_id=self.auth.require_user_id())

    def get(self, record_id: str) -> Optional[RecordT]:
        return self.repository.get_by_id(record_id, user_id=self.auth.require_user_id())

    def listen(self, listener: SnapshotListener) -> Subscription:
        """Stream snapshots of the user's collection to ``listener``.

        The user is resolved once, when the subscription starts.
        """
        user_id = self.auth.require_user_id()
        return self.change_feed.subscribe(
            self.name,
            user_id,
            lambda: self.repository.list_all(user_id=user_id),
            listener,
        )


class FinanceStore:
    """Data-access object over the five per-user finance collections."""

    def __init__(
        self,
        session_factory: SessionFactory,
        auth: AuthService,
        *,
        change_feed: ChangeFeed | None = None,
        clock: Clock = datetime.now,
    ):
        self.auth = auth
        self.clock = clock
        self.change_feed = change_feed or ChangeFeed()
        feed = self.change_feed
        self.paychecks: RecordCollection[Paycheck] = RecordCollection(
            SQLModelPaycheckRepository(session_factory, feed), auth, feed
        )
        self.expenses: RecordCollection[Expense] = RecordCollection(
            SQLModelExpenseRepository(session_factory, feed), auth, feed
        )
        self.fixed_expenses: RecordCollection[FixedExpense] = RecordCollection(
            SQLModelFixedExpenseRepository(session_factory, feed), auth, feed
        )
        self.credit_cards: RecordCollection[CreditCard] = RecordCollection(
            SQLModelCreditCardRepository(session_factory, feed), auth, feed
        )
        self.savings: RecordCollection[Saving] = RecordCollection(
            SQLModelSavingRepository(session_factory, feed), auth, feed
        )

    def save_expense(self, name: str, amount) -> Expense:
        """Record a variable expense stamped with the current instant."""
        expense = Expense(name=name, amount=amount, date=self.clock())
        return self.expenses.create(expense)

    def save_paycheck(self, amount) -> Paycheck:
        return self.paychecks.create(Paycheck(amount=amount, date=self.clock()))

    def save_saving(self, amount) -> Saving:
        return self.savings.create(Saving(amount=amount, date=self.clock()))
