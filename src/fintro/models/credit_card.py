"""Credit cards with a manually maintained debt balance."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class CreditCard(SQLModel, table=True):
    """Card debt due on ``payment_due_day``; debt is entered by hand."""

    __tablename__: ClassVar[str] = "credit_card"

    id: Optional[str] = Field(default=None, primary_key=True, max_length=32)
    user_id: str = Field(foreign_key="user.id", nullable=False, index=True, max_length=32)
    name: str = Field(default="", max_length=120)
    current_debt: Decimal = Field(default=Decimal("0"), max_digits=14, decimal_places=2)
    closing_day: int = Field(default=1, ge=1, le=31)
    payment_due_day: int = Field(default=1, ge=1, le=31)
