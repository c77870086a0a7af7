"""Concrete repository implementations using SQLModel."""

from .base import SQLModelRecordRepository
from .credit_card import SQLModelCreditCardRepository
from .expense import SQLModelExpenseRepository
from .fixed_expense import SQLModelFixedExpenseRepository
from .paycheck import SQLModelPaycheckRepository
from .saving import SQLModelSavingRepository

__all__ = [
    "SQLModelRecordRepository",
    "SQLModelCreditCardRepository",
    "SQLModelExpenseRepository",
    "SQLModelFixedExpenseRepository",
    "SQLModelPaycheckRepository",
    "SQLModelSavingRepository",
]
