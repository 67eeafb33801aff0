"""Command line tests."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from click.testing import CliRunner

from moneywise.cli import main
from moneywise.config import BaseConfig
from moneywise.infra.database import bootstrap_database
from moneywise.models import Budget, Debt, Expense, ExpenseCategory, User


@pytest.fixture(autouse=True)
def quiet_console(monkeypatch):
    """Keep INFO logs off the console so command output can be compared exactly."""
    monkeypatch.setenv("MONEYWISE_DEV_MODE", "false")


def test_payoff_reports_months_and_date():
    result = CliRunner().invoke(
        main,
        ["payoff", "--balance", "1200", "--rate", "12", "--minimum", "200", "--as-of", "2025-01-15"],
    )

    assert result.exit_code == 0
    assert result.output.strip() == "Paid off in 7 months on 2025-08-15"


def test_payoff_schedule_lists_each_month():
    result = CliRunner().invoke(
        main,
        [
            "payoff", "--balance", "1200", "--rate", "12", "--minimum", "200",
            "--as-of", "2025-01-15", "--schedule",
        ],
    )

    lines = result.output.strip().splitlines()
    assert result.exit_code == 0
    assert len(lines) == 8
    assert lines[1].startswith("2025-02-15  payment=200.00  interest=12.00")
    assert lines[-1].endswith("balance=0.00")


def test_payoff_not_achievable():
    result = CliRunner().invoke(
        main, ["payoff", "--balance", "1000", "--rate", "24", "--minimum", "15"]
    )

    assert result.exit_code == 0
    assert result.output.strip() == "Not achievable (interest_not_covered)"


def test_payoff_rejects_non_numeric_amounts():
    result = CliRunner().invoke(
        main, ["payoff", "--balance", "lots", "--rate", "12", "--minimum", "200"]
    )

    assert result.exit_code == 2


def test_window_prints_inclusive_bounds():
    result = CliRunner().invoke(main, ["window", "--start", "2025-01-01", "--period", "monthly"])

    assert result.exit_code == 0
    assert result.output.strip() == "2025-01-01T00:00:00.000 -> 2025-01-31T23:59:59.999"


def test_window_rejects_unknown_period():
    result = CliRunner().invoke(main, ["window", "--start", "2025-01-01", "--period", "daily"])

    assert result.exit_code == 2
    assert "Invalid budget period" in result.output


def test_remind_runs_against_configured_database(clean_logging):
    engine, session_factory = bootstrap_database(BaseConfig())
    with session_factory() as session:
        user = User(username="cli", email="cli@example.com")
        session.add(user)
        session.flush()
        session.add(
            Debt(
                user_id=user.id,
                name="Visa",
                principal=500.0,
                current_balance=500.0,
                minimum_payment=25.0,
                due_day=20,
                start_date=date(2024, 1, 1),
                last_payment_date=date(2024, 12, 20),
            )
        )
    engine.dispose()

    result = CliRunner().invoke(main, ["remind", "--today", "2025-01-18"])

    assert result.exit_code == 0
    assert "Sent 1 reminder(s), skipped 0" in result.output


def test_budgets_reports_current_period(clean_logging):
    engine, session_factory = bootstrap_database(BaseConfig())
    with session_factory() as session:
        user = User(username="cli", email="cli@example.com")
        session.add(user)
        session.flush()
        category = ExpenseCategory(user_id=user.id, name="Dining")
        session.add(category)
        session.flush()
        session.add(
            Budget(
                user_id=user.id,
                category_id=category.id,
                amount=200.0,
                period="monthly",
                start_date=datetime(2025, 1, 1),
                end_date=datetime(2025, 1, 31, 23, 59, 59, 999000),
            )
        )
        session.add(
            Expense(
                user_id=user.id,
                category_id=category.id,
                amount=50.0,
                occurred_at=datetime(2025, 2, 3, 19, 30),
            )
        )
        user_id, category_id = user.id, category.id
    engine.dispose()

    result = CliRunner().invoke(
        main, ["budgets", "--user-id", str(user_id), "--as-of", "2025-02-14"]
    )

    assert result.exit_code == 0
    assert result.output.strip() == (
        f"2025-02-01 -> 2025-02-28  category={category_id}  spent=50.00  "
        "amount=200.00  used=25.0%"
    )


def test_budgets_without_any(clean_logging):
    result = CliRunner().invoke(main, ["budgets", "--user-id", "1"])

    assert result.exit_code == 0
    assert result.output.strip() == "No active budgets"


def test_budgets_reports_corrupt_period_cleanly(clean_logging):
    engine, session_factory = bootstrap_database(BaseConfig())
    with session_factory() as session:
        user = User(username="cli", email="cli@example.com")
        session.add(user)
        session.flush()
        category = ExpenseCategory(user_id=user.id, name="Dining")
        session.add(category)
        session.flush()
        session.add(
            Budget(
                user_id=user.id,
                category_id=category.id,
                amount=200.0,
                period="fortnightly",
                start_date=datetime(2025, 1, 1),
                end_date=datetime(2025, 1, 14, 23, 59, 59, 999000),
            )
        )
        user_id = user.id
    engine.dispose()

    result = CliRunner().invoke(main, ["budgets", "--user-id", str(user_id)])

    assert result.exit_code == 1
    assert "Cannot report budgets: Invalid budget period 'fortnightly'" in result.output
    assert result.exception is None or isinstance(result.exception, SystemExit)


def test_window_rejects_anchor_past_calendar_end():
    result = CliRunner().invoke(main, ["window", "--start", "9999-12-31", "--period", "weekly"])

    assert result.exit_code == 2
    assert "runs past 9999-12-31" in result.output
