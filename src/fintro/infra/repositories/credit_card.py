"""SQLModel implementation of the credit card repository."""

from __future__ import annotations

from ...models.credit_card import CreditCard
from .base import SQLModelRecordRepository


class SQLModelCreditCardRepository(SQLModelRecordRepository[CreditCard]):
    """Credit cards in storage order."""

    model = CreditCard
    collection = "credit_cards"
