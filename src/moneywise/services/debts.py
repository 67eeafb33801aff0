"""Debt record maintenance: payoff projections, payments and summaries."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, Protocol

from ..errors import RecordNotFound
from ..logging_config import get_logger
from ..models.debt import Debt, DebtStatus
from .amortization import (
    Amount,
    DebtSnapshot,
    PayoffProjection,
    project_payoff,
    quantize_cents,
    to_decimal,
)

logger = get_logger("services.debts")

_ZERO = Decimal("0")

# Fields a caller may change through DebtService.update_debt.
UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "debt_type",
        "current_balance",
        "interest_rate",
        "minimum_payment",
        "due_day",
        "lender",
        "status",
        "reminder_enabled",
        "reminder_days_before",
        "notes",
        "total_paid",
        "last_payment_date",
        "last_payment_amount",
    }
)


# Updatable fields that may be cleared by passing None.
NULLABLE_FIELDS = frozenset({"last_payment_date", "last_payment_amount"})


class DebtRepository(Protocol):
    def get_by_id(self, debt_id: int, *, user_id: int) -> Optional[Debt]:  # pragma: no cover
        ...

    def list_active(self, *, user_id: int) -> list[Debt]:  # pragma: no cover
        ...

    def create(self, debt: Debt, *, user_id: int) -> Debt:  # pragma: no cover
        ...

    def update(self, debt: Debt, *, user_id: int) -> Debt:  # pragma: no cover
        ...


def snapshot_for(debt: Debt) -> DebtSnapshot:
    """Build the projection input from a stored debt."""

    return DebtSnapshot(
        current_balance=debt.current_balance,
        annual_interest_rate_percent=debt.interest_rate,
        minimum_payment=debt.minimum_payment,
    )


def refresh_projection(debt: Debt, *, as_of: date | None = None) -> PayoffProjection:
    """Recompute ``estimated_payoff_date``; ``None`` when payoff is not achievable."""

    projection = project_payoff(snapshot_for(debt), as_of or date.today())
    debt.estimated_payoff_date = projection.projected_payoff_date
    return projection


def record_payment(debt: Debt, amount: Amount, *, paid_on: date | None = None) -> PayoffProjection:
    """Apply a payment to ``debt`` in place and refresh its projection.

    The balance never drops below zero; a debt paid down to zero is marked
    ``paid_off`` with today's payoff date.
    """

    payment = to_decimal(amount)
    if payment < 0:
        raise ValueError("Payment amount cannot be negative")

    today = paid_on or date.today()
    balance = max(_ZERO, to_decimal(debt.current_balance) - payment)
    debt.current_balance = float(quantize_cents(balance))
    debt.total_paid = float(quantize_cents(to_decimal(debt.total_paid) + payment))
    debt.last_payment_date = today
    debt.last_payment_amount = float(quantize_cents(payment))

    if balance == 0:
        debt.status = DebtStatus.paid_off.value
        debt.payoff_date = today

    return refresh_projection(debt, as_of=today)


def total_interest_paid(debt: Debt) -> Decimal:
    """Payments beyond the principal retired so far."""

    principal_retired = to_decimal(debt.principal) - to_decimal(debt.current_balance)
    return max(_ZERO, to_decimal(debt.total_paid) - principal_retired)


def percentage_paid_off(debt: Debt) -> Decimal:
    principal = to_decimal(debt.principal)
    if principal <= 0:
        return _ZERO
    return (principal - to_decimal(debt.current_balance)) / principal * 100


@dataclass(slots=True)
class DebtTypeTotals:
    count: int = 0
    total_balance: Decimal = _ZERO
    total_minimum_payment: Decimal = _ZERO


@dataclass(slots=True)
class DebtSummary:
    """Portfolio-level figures across a user's active debts."""

    total_debt: Decimal
    total_principal: Decimal
    total_paid: Decimal
    total_monthly_payment: Decimal
    average_interest_rate: Decimal
    debt_count: int
    percentage_paid_off: Decimal
    by_type: dict[str, DebtTypeTotals] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_debt": str(self.total_debt),
            "total_principal": str(self.total_principal),
            "total_paid": str(self.total_paid),
            "total_monthly_payment": str(self.total_monthly_payment),
            "average_interest_rate": str(self.average_interest_rate),
            "debt_count": self.debt_count,
            "percentage_paid_off": str(self.percentage_paid_off),
            "by_type": {
                name: {
                    "count": totals.count,
                    "total_balance": str(totals.total_balance),
                    "total_minimum_payment": str(totals.total_minimum_payment),
                }
                for name, totals in self.by_type.items()
            },
        }


def summarize(debts: Iterable[Debt]) -> DebtSummary:
    """Aggregate active debts; the interest rate is balance-weighted."""

    active = [debt for debt in debts if debt.status == DebtStatus.active.value]
    total_debt = sum((to_decimal(d.current_balance) for d in active), _ZERO)
    total_principal = sum((to_decimal(d.principal) for d in active), _ZERO)
    weighted = sum(
        (to_decimal(d.interest_rate) * to_decimal(d.current_balance) for d in active), _ZERO
    )

    by_type: dict[str, DebtTypeTotals] = defaultdict(DebtTypeTotals)
    for debt in active:
        totals = by_type[debt.debt_type]
        totals.count += 1
        totals.total_balance += to_decimal(debt.current_balance)
        totals.total_minimum_payment += to_decimal(debt.minimum_payment)

    average_rate = weighted / total_debt if total_debt > 0 else _ZERO
    paid_off = (
        (total_principal - total_debt) / total_principal * 100 if total_principal > 0 else _ZERO
    )
    return DebtSummary(
        total_debt=quantize_cents(total_debt),
        total_principal=quantize_cents(total_principal),
        total_paid=quantize_cents(sum((to_decimal(d.total_paid) for d in active), _ZERO)),
        total_monthly_payment=quantize_cents(
            sum((to_decimal(d.minimum_payment) for d in active), _ZERO)
        ),
        average_interest_rate=quantize_cents(average_rate),
        debt_count=len(active),
        percentage_paid_off=quantize_cents(paid_off),
        by_type=dict(by_type),
    )


class DebtService:
    """Persisted debt operations that keep the payoff projection current."""

    def __init__(self, repository: DebtRepository) -> None:
        self.repository = repository

    def _require(self, debt_id: int, user_id: int) -> Debt:
        debt = self.repository.get_by_id(debt_id, user_id=user_id)
        if debt is None:
            raise RecordNotFound("Debt", debt_id)
        return debt

    def _log_projection(self, debt: Debt, projection: PayoffProjection) -> None:
        logger.info(
            "Debt payoff projection refreshed",
            extra={
                "debt_id": debt.id,
                "status": projection.status.value,
                "months_to_payoff": projection.months_to_payoff,
                "estimated_payoff_date": projection.projected_payoff_date,
            },
        )

    def create_debt(self, debt: Debt, *, user_id: int, as_of: date | None = None) -> Debt:
        """Store a new debt with its projected payoff date.

        When nothing has been recorded as paid yet, the gap between principal
        and current balance is counted as paid.
        """

        if not debt.total_paid and debt.principal and debt.current_balance:
            debt.total_paid = max(0.0, debt.principal - debt.current_balance)
        projection = refresh_projection(debt, as_of=as_of)
        created = self.repository.create(debt, user_id=user_id)
        self._log_projection(created, projection)
        return created

    def update_debt(
        self, debt_id: int, *, user_id: int, as_of: date | None = None, **changes: Any
    ) -> Debt:
        """Apply the given field changes and refresh the projection.

        Only fields passed are touched. ``None`` clears the last-payment
        fields and is rejected for every other field.
        """

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update debt fields: {', '.join(sorted(unknown))}")

        cleared = {name for name, value in changes.items() if value is None} - NULLABLE_FIELDS
        if cleared:
            raise ValueError(f"Debt fields cannot be empty: {', '.join(sorted(cleared))}")

        debt = self._require(debt_id, user_id)
        for name, value in changes.items():
            setattr(debt, name, value)
        projection = refresh_projection(debt, as_of=as_of)
        updated = self.repository.update(debt, user_id=user_id)
        self._log_projection(updated, projection)
        return updated

    def pay(
        self, debt_id: int, amount: Amount, *, user_id: int, paid_on: date | None = None
    ) -> Debt:
        debt = self._require(debt_id, user_id)
        projection = record_payment(debt, amount, paid_on=paid_on)
        updated = self.repository.update(debt, user_id=user_id)
        logger.info(
            "Debt payment recorded",
            extra={"debt_id": debt.id, "amount": str(amount), "status": debt.status},
        )
        self._log_projection(updated, projection)
        return updated

    def summary(self, *, user_id: int) -> DebtSummary:
        return summarize(self.repository.list_active(user_id=user_id))


__all__ = [
    "DebtService",
    "DebtSummary",
    "DebtTypeTotals",
    "percentage_paid_off",
    "record_payment",
    "refresh_projection",
    "snapshot_for",
    "summarize",
    "total_interest_paid",
]
