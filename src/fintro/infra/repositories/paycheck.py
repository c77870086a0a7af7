"""SQLModel implementation of the paycheck repository."""

from __future__ import annotations

from ...models.paycheck import Paycheck
from .base import SQLModelRecordRepository


class SQLModelPaycheckRepository(SQLModelRecordRepository[Paycheck]):
    """Paychecks, newest first."""

    model = Paycheck
    collection = "paychecks"
    ordering = (Paycheck.date.desc(),)  # type: ignore[attr-defined]
