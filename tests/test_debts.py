"""Debt maintenance tests: payments, projections and summaries."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from moneywise.errors import RecordNotFound
from moneywise.infra.repositories import SQLModelDebtRepository
from moneywise.models import Debt, DebtStatus
from moneywise.services.amortization import PayoffStatus
from moneywise.services.debts import (
    DebtService,
    percentage_paid_off,
    record_payment,
    refresh_projection,
    snapshot_for,
    summarize,
    total_interest_paid,
)


def _debt(**overrides) -> Debt:
    fields = dict(
        id=1,
        user_id=1,
        name="Visa",
        debt_type="credit_card",
        principal=1500.0,
        current_balance=1200.0,
        interest_rate=12.0,
        minimum_payment=200.0,
        due_day=15,
        start_date=date(2024, 6, 1),
    )
    fields.update(overrides)
    return Debt(**fields)


def test_snapshot_uses_stored_terms():
    snapshot = snapshot_for(_debt())

    assert snapshot.current_balance == Decimal("1200.0")
    assert snapshot.annual_interest_rate_percent == Decimal("12.0")
    assert snapshot.minimum_payment == Decimal("200.0")


def test_refresh_projection_sets_estimated_payoff_date():
    debt = _debt()

    projection = refresh_projection(debt, as_of=date(2025, 1, 15))

    assert projection.months_to_payoff == 7
    assert debt.estimated_payoff_date == date(2025, 8, 15)


def test_refresh_projection_clears_date_when_not_achievable():
    debt = _debt(current_balance=1000.0, interest_rate=24.0, minimum_payment=15.0)
    debt.estimated_payoff_date = date(2030, 1, 1)

    projection = refresh_projection(debt, as_of=date(2025, 1, 15))

    assert projection.status is PayoffStatus.interest_not_covered
    assert debt.estimated_payoff_date is None


def test_record_payment_reduces_balance_and_reprojects():
    debt = _debt()

    projection = record_payment(debt, "200", paid_on=date(2025, 1, 15))

    assert debt.current_balance == 1000.0
    assert debt.total_paid == 200.0
    assert debt.last_payment_date == date(2025, 1, 15)
    assert debt.last_payment_amount == 200.0
    assert debt.status == DebtStatus.active.value
    assert projection.months_to_payoff == 6
    assert debt.estimated_payoff_date == date(2025, 7, 15)


def test_overpayment_marks_debt_paid_off():
    debt = _debt(current_balance=150.0)

    projection = record_payment(debt, 200, paid_on=date(2025, 3, 2))

    assert debt.current_balance == 0.0
    assert debt.status == DebtStatus.paid_off.value
    assert debt.payoff_date == date(2025, 3, 2)
    assert projection.months_to_payoff == 0
    assert debt.estimated_payoff_date == date(2025, 3, 2)


def test_negative_payment_is_rejected():
    debt = _debt()

    with pytest.raises(ValueError):
        record_payment(debt, "-5")

    assert debt.current_balance == 1200.0


def test_interest_and_progress_helpers():
    debt = _debt(principal=1000.0, current_balance=800.0, total_paid=260.0)

    assert total_interest_paid(debt) == Decimal("60.0")
    assert percentage_paid_off(debt) == Decimal("20")


def test_interest_paid_never_negative():
    debt = _debt(principal=1000.0, current_balance=800.0, total_paid=0.0)

    assert total_interest_paid(debt) == Decimal("0")


def test_percentage_paid_off_without_principal():
    assert percentage_paid_off(_debt(principal=0.0, current_balance=0.0)) == Decimal("0")


def test_summarize_active_debts():
    debts = [
        _debt(id=1, principal=1250.0, current_balance=1000.0, interest_rate=20.0,
              minimum_payment=50.0, debt_type="credit_card", total_paid=250.0),
        _debt(id=2, principal=1250.0, current_balance=1000.0, interest_rate=15.0,
              minimum_payment=75.0, debt_type="auto_loan", total_paid=250.0),
        _debt(id=3, principal=900.0, current_balance=0.0, interest_rate=5.0,
              minimum_payment=30.0, status=DebtStatus.paid_off.value),
    ]

    summary = summarize(debts)

    assert summary.debt_count == 2
    assert summary.total_debt == Decimal("2000.00")
    assert summary.total_principal == Decimal("2500.00")
    assert summary.total_paid == Decimal("500.00")
    assert summary.total_monthly_payment == Decimal("125.00")
    assert summary.average_interest_rate == Decimal("17.50")
    assert summary.percentage_paid_off == Decimal("20.00")
    assert set(summary.by_type) == {"credit_card", "auto_loan"}
    assert summary.by_type["auto_loan"].total_minimum_payment == Decimal("75.0")

    payload = summary.as_dict()
    assert payload["average_interest_rate"] == "17.50"
    assert payload["by_type"]["credit_card"]["count"] == 1


def test_summarize_empty():
    summary = summarize([])

    assert summary.debt_count == 0
    assert summary.average_interest_rate == Decimal("0.00")
    assert summary.percentage_paid_off == Decimal("0.00")


@pytest.fixture
def service(session_factory):
    return DebtService(SQLModelDebtRepository(session_factory))


def test_create_debt_records_paid_amount_and_projection(service, user, debt_factory):
    debt = debt_factory(
        "Visa",
        principal=1500.0,
        current_balance=1200.0,
        interest_rate=12.0,
        minimum_payment=200.0,
        persist=False,
    )

    created = service.create_debt(debt, user_id=user.id, as_of=date(2025, 1, 15))

    assert created.id is not None
    assert created.total_paid == 300.0
    assert created.estimated_payoff_date == date(2025, 8, 15)


def test_update_debt_reprojects(service, user, debt_factory):
    debt = service.create_debt(
        debt_factory("Visa", current_balance=1200.0, interest_rate=12.0,
                     minimum_payment=200.0, persist=False),
        user_id=user.id,
        as_of=date(2025, 1, 15),
    )

    updated = service.update_debt(
        debt.id, user_id=user.id, as_of=date(2025, 1, 15), minimum_payment=15.0,
        interest_rate=24.0,
    )

    assert updated.minimum_payment == 15.0
    assert updated.estimated_payoff_date is None


def test_update_debt_rejects_unknown_fields(service, user, debt_factory):
    debt = debt_factory()

    with pytest.raises(ValueError, match="principal"):
        service.update_debt(debt.id, user_id=user.id, principal=5.0)


def test_update_missing_debt_raises(service, user):
    with pytest.raises(RecordNotFound) as excinfo:
        service.update_debt(404, user_id=user.id, name="Ghost")

    assert excinfo.value.record_id == 404


def test_pay_persists_payment(service, session_factory, user, debt_factory):
    debt = debt_factory(current_balance=100.0, minimum_payment=50.0)

    service.pay(debt.id, "100", user_id=user.id, paid_on=date(2025, 2, 1))

    stored = SQLModelDebtRepository(session_factory).get_by_id(debt.id, user_id=user.id)
    assert stored.current_balance == 0.0
    assert stored.status == DebtStatus.paid_off.value
    assert stored.payoff_date == date(2025, 2, 1)
    assert stored.total_paid == 100.0


def test_summary_reads_active_debts(service, user, debt_factory):
    debt_factory("Card", principal=1000.0, current_balance=500.0, interest_rate=20.0)
    debt_factory("Old loan", current_balance=0.0, status=DebtStatus.paid_off.value)

    summary = service.summary(user_id=user.id)

    assert summary.debt_count == 1
    assert summary.total_debt == Decimal("500.00")
    assert summary.percentage_paid_off == Decimal("50.00")


def test_update_debt_can_clear_last_payment(service, session_factory, user, debt_factory):
    debt = debt_factory(last_payment_date=date(2025, 1, 10), last_payment_amount=75.0)

    service.update_debt(
        debt.id, user_id=user.id, last_payment_date=None, last_payment_amount=None
    )

    stored = SQLModelDebtRepository(session_factory).get_by_id(debt.id, user_id=user.id)
    assert stored.last_payment_date is None
    assert stored.last_payment_amount is None
    assert stored.name == "Test Debt"


def test_update_debt_rejects_clearing_required_fields(service, session_factory, user, debt_factory):
    debt = debt_factory("Visa")

    with pytest.raises(ValueError, match="name"):
        service.update_debt(debt.id, user_id=user.id, name=None)

    stored = SQLModelDebtRepository(session_factory).get_by_id(debt.id, user_id=user.id)
    assert stored.name == "Visa"
