"""Income events."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import ClassVar, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Paycheck(SQLModel, table=True):
    """A single paycheck received by the user."""

    __tablename__: ClassVar[str] = "paycheck"

    id: Optional[str] = Field(default=None, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    amount: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    # Local wall-clock time without an offset.
    date: datetime = Field(sa_type=DateTime(timezone=False), nullable=False, index=True)
