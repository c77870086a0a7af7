"""Recurring expenses paid on a fixed day of the month."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class FixedExpense(SQLModel, table=True):
    """Expense that recurs every month on ``day_of_month``.

    The day is not checked against the calendar: day 31 is accepted and simply
    never matches a 30 day month.
    """

    __tablename__: ClassVar[str] = "fixed_expense"

    id: Optional[str] = Field(default=None, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    name: str = Field(default="", max_length=120)
    amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    day_of_month: int = Field(default=1, ge=1, le=31, index=True)
