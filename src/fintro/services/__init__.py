"""Service module exports."""

from . import auth, balances, finance_store, pay_periods

__all__ = [
    "auth",
    "balances",
    "finance_store",
    "pay_periods",
]
