"""SQLModel implementation of the savings repository."""

from __future__ import annotations

from ...models.saving import Saving
from .base import SQLModelRecordRepository


class SQLModelSavingRepository(SQLModelRecordRepository[Saving]):
    """Savings snapshots, newest first."""

    model = Saving
    collection = "savings"
    ordering = (Saving.date.desc(),)  # type: ignore[attr-defined]
