"""SQLModel table exports."""

from .credit_card import CreditCard
from .expense import Expense
from .fixed_expense import FixedExpense
from .paycheck import Paycheck
from .saving import Saving
from .user import User

__all__ = [
    "CreditCard",
    "Expense",
    "FixedExpense",
    "Paycheck",
    "Saving",
    "User",
]
