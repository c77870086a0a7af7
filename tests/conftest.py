"""Pytest configuration and shared fixtures for Fintro tests.

This module provides database fixtures, a signed-in auth service, the finance
store and a controllable clock, so services and view-models can be tested
without touching the real app database.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from decimal import Decimal
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from fintro.models import CreditCard, Expense, FixedExpense, Paycheck, Saving, User  # noqa: F401
from fintro.infra.database import create_session_factory
from fintro.infra.realtime import ChangeFeed
from fintro.services.auth import AuthService
from fintro.services.finance_store import FinanceStore

TEST_EMAIL = "tester@example.com"
TEST_PASSWORD = "s3cret-pass"


class FakeClock:
    """Callable clock whose current instant is set by the test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session factory, the same one the app uses."""

    return create_session_factory(db_engine)


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Clock pinned to 2026-10-19 12:00, inside the first pay period."""

    return FakeClock(datetime(2026, 10, 19, 12, 0, 0))


@pytest.fixture
def change_feed() -> ChangeFeed:
    return ChangeFeed()


@pytest.fixture
def auth_service(session_factory) -> AuthService:
    """Auth service with nobody signed in."""

    return AuthService(session_factory)


@pytest.fixture
def signed_in_auth(auth_service) -> AuthService:
    """Auth service with a freshly registered user signed in."""

    auth_service.create_account(TEST_EMAIL, TEST_PASSWORD, "Test User")
    return auth_service


@pytest.fixture
def user(signed_in_auth) -> User:
    return signed_in_auth.current_user


@pytest.fixture
def store(session_factory, signed_in_auth, change_feed, clock) -> FinanceStore:
    """Finance store bound to the signed-in test user."""

    return FinanceStore(session_factory, signed_in_auth, change_feed=change_feed, clock=clock)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def make_records():
    """Factory for unsaved record instances with sensible defaults."""

    class _Factory:
        @staticmethod
        def paycheck(amount: str = "2000", when: datetime | None = None) -> Paycheck:
            return Paycheck(amount=Decimal(amount), date=when or datetime(2026, 10, 15, 9, 0))

        @staticmethod
        def expense(name: str = "Groceries", amount: str = "50", when: datetime | None = None) -> Expense:
            return Expense(name=name, amount=Decimal(amount), date=when or datetime(2026, 10, 16, 18, 0))

        @staticmethod
        def fixed(name: str = "Rent", amount: str = "800", day: int = 15) -> FixedExpense:
            return FixedExpense(name=name, amount=Decimal(amount), day_of_month=day)

        @staticmethod
        def card(name: str = "Visa", debt: str = "300", closing: int = 5, due: int = 20) -> CreditCard:
            return CreditCard(
                name=name, current_debt=Decimal(debt), closing_day=closing, payment_due_day=due
            )

        @staticmethod
        def saving(amount: str = "1000", when: datetime | None = None) -> Saving:
            return Saving(amount=Decimal(amount), date=when or datetime(2026, 10, 1, 8, 0))

    return _Factory()
