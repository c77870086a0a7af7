"""SQLModel implementation of the fixed expense repository."""

from __future__ import annotations

from ...models.fixed_expense import FixedExpense
from .base import SQLModelRecordRepository


class SQLModelFixedExpenseRepository(SQLModelRecordRepository[FixedExpense]):
    """Fixed expenses ordered by the day they are paid."""

    model = FixedExpense
    collection = "fixed_expenses"
    ordering = (FixedExpense.day_of_month,)
