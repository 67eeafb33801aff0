"""Pytest configuration and shared fixtures for moneywise tests.

Provides an isolated SQLite database per test, repository-style session
factories and row factories for users, categories, expenses, budgets and debts.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from moneywise.infra.database import create_session_factory
from moneywise.models import Budget, Debt, Expense, ExpenseCategory, User

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to the test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Session used by the row factories below."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Transactional session factory, as handed to repositories."""
    return create_session_factory(db_engine)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def user(db_session) -> User:
    """Create a default user for scoping data."""
    u = User(username="tester", email="tester@example.com", display_name="Tester")
    db_session.add(u)
    db_session.commit()
    db_session.refresh(u)
    return u


@pytest.fixture
def category_factory(db_session, user):
    def _create_category(name: str = "Groceries", color: str = "#FF5733") -> ExpenseCategory:
        category = ExpenseCategory(user_id=user.id, name=name, color=color)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category

    return _create_category


@pytest.fixture
def expense_factory(db_session, user):
    """Factory for creating test expenses.

    Returns:
        Callable: Function that creates and persists Expense instances
    """

    def _create_expense(
        amount: float,
        category_id: int,
        occurred_at: datetime | None = None,
        description: str = "Test expense",
    ) -> Expense:
        expense = Expense(
            user_id=user.id,
            category_id=category_id,
            amount=amount,
            occurred_at=occurred_at or datetime.now(),
            description=description,
        )
        db_session.add(expense)
        db_session.commit()
        db_session.refresh(expense)
        return expense

    return _create_expense


@pytest.fixture
def budget_factory(db_session, user):
    """Factory for creating budgets directly, bypassing the service."""

    def _create_budget(
        category_id: int,
        amount: float = 500.0,
        period: str = "monthly",
        start_date: datetime = datetime(2025, 1, 1),
        end_date: datetime = datetime(2025, 1, 31, 23, 59, 59, 999000),
        is_active: bool = True,
    ) -> Budget:
        budget = Budget(
            user_id=user.id,
            category_id=category_id,
            amount=amount,
            period=period,
            start_date=start_date,
            end_date=end_date,
            is_active=is_active,
        )
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget

    return _create_budget


@pytest.fixture
def debt_factory(db_session, user):
    """Factory for creating test debts.

    Returns:
        Callable: Function that creates and persists Debt instances
    """

    def _create_debt(
        name: str = "Test Debt",
        principal: float = 1000.00,
        current_balance: float = 1000.00,
        interest_rate: float = 18.0,
        minimum_payment: float = 50.00,
        due_day: int = 15,
        start_date: date = date(2024, 1, 1),
        persist: bool = True,
        **overrides,
    ) -> Debt:
        """Create a test debt with sensible defaults.

        Args:
            persist: When False the debt is returned without being stored
            overrides: Any other Debt column
        """
        debt = Debt(
            user_id=user.id,
            name=name,
            principal=principal,
            current_balance=current_balance,
            interest_rate=interest_rate,
            minimum_payment=minimum_payment,
            due_day=due_day,
            start_date=start_date,
            **overrides,
        )
        if persist:
            db_session.add(debt)
            db_session.commit()
            db_session.refresh(debt)
        return debt

    return _create_debt


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point configuration at a scratch directory and drop inherited overrides."""
    for name in (
        "MONEYWISE_DATABASE_URL",
        "MONEYWISE_DEV_MODE",
        "MONEYWISE_REMINDER_HOUR",
        "MONEYWISE_BUDGET_ALERT_THRESHOLD",
        "MONEYWISE_NOTIFICATION_RETENTION_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MONEYWISE_DATA_DIR", str(tmp_path / "data"))
    yield


@pytest.fixture
def clean_logging():
    """Close handlers attached by setup_logging so log files are released."""
    yield
    root = logging.getLogger("moneywise")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
