"""SQLModel implementation of the variable expense repository."""

from __future__ import annotations

from ...models.expense import Expense
from .base import SQLModelRecordRepository


class SQLModelExpenseRepository(SQLModelRecordRepository[Expense]):
    """Variable expenses, newest first."""

    model = Expense
    collection = "expenses"
    ordering = (Expense.date.desc(),)  # type: ignore[attr-defined]
