"""Debt payoff projection under monthly compounding and a fixed payment."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Union

from .dates import add_months

Amount = Union[Decimal, int, float, str]

# Projections stop after 50 years; anything slower is reported as not achievable.
MAX_PAYOFF_MONTHS = 600

_CENT = Decimal("0.01")
_ZERO = Decimal("0")


def to_decimal(value: Amount) -> Decimal:
    """Coerce a money-ish value to ``Decimal`` without binary float noise."""

    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


class PayoffStatus(str, Enum):
    achievable = "achievable"
    interest_not_covered = "interest_not_covered"
    horizon_exceeded = "horizon_exceeded"


@dataclass(frozen=True, slots=True)
class DebtSnapshot:
    """Debt terms at evaluation time.

    Range checks (non-negative balance and payment, rate within 0..100) are
    the caller's job; the projection only clamps what it must.
    """

    current_balance: Decimal
    annual_interest_rate_percent: Decimal
    minimum_payment: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_balance", to_decimal(self.current_balance))
        object.__setattr__(
            self, "annual_interest_rate_percent", to_decimal(self.annual_interest_rate_percent)
        )
        object.__setattr__(self, "minimum_payment", to_decimal(self.minimum_payment))

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_interest_rate_percent / 100 / 12


@dataclass(frozen=True, slots=True)
class PayoffProjection:
    status: PayoffStatus
    months_to_payoff: int | None = None
    projected_payoff_date: date | None = None

    @property
    def achievable(self) -> bool:
        return self.status is PayoffStatus.achievable


@dataclass(frozen=True, slots=True)
class ScheduledPayment:
    """One projected month of a payoff schedule, rounded to cents."""

    due_date: date
    payment: Decimal
    interest: Decimal
    principal: Decimal
    remaining_balance: Decimal


def _months_until_paid(snapshot: DebtSnapshot) -> tuple[PayoffStatus, int]:
    monthly_rate = snapshot.monthly_rate
    balance = snapshot.current_balance
    months = 0
    while balance > 0 and months < MAX_PAYOFF_MONTHS:
        interest = balance * monthly_rate
        principal = snapshot.minimum_payment - interest
        if principal <= 0:
            return PayoffStatus.interest_not_covered, months
        balance -= min(principal, balance)
        months += 1
    if balance > 0:
        return PayoffStatus.horizon_exceeded, months
    return PayoffStatus.achievable, months


def project_payoff(snapshot: DebtSnapshot, as_of: date) -> PayoffProjection:
    """Project when ``snapshot`` is paid off paying the minimum every month.

    Interest accrues monthly at ``rate / 100 / 12`` on the outstanding balance.
    A payment that does not exceed the month's interest can never retire the
    debt and yields ``PayoffStatus.interest_not_covered``; a debt that is still
    open after :data:`MAX_PAYOFF_MONTHS` yields ``PayoffStatus.horizon_exceeded``.
    The payoff date is ``as_of`` plus the number of months, in calendar months.
    """

    if snapshot.current_balance <= 0:
        return PayoffProjection(PayoffStatus.achievable, 0, as_of)

    status, months = _months_until_paid(snapshot)
    if status is not PayoffStatus.achievable:
        return PayoffProjection(status)
    return PayoffProjection(status, months, add_months(as_of, months))


def amortization_schedule(
    snapshot: DebtSnapshot, as_of: date, *, months: int | None = None
) -> list[ScheduledPayment]:
    """Return the month-by-month rows behind :func:`project_payoff`.

    Rows are produced with the same unrounded recurrence as the projection and
    rounded to cents only for display. The schedule is empty when the payment
    does not cover the first month's interest, and stops at ``months`` rows
    or the projection horizon otherwise.
    """

    limit = MAX_PAYOFF_MONTHS if months is None else min(months, MAX_PAYOFF_MONTHS)
    monthly_rate = snapshot.monthly_rate
    balance = max(snapshot.current_balance, _ZERO)
    rows: list[ScheduledPayment] = []

    while balance > 0 and len(rows) < limit:
        interest = balance * monthly_rate
        principal = snapshot.minimum_payment - interest
        if principal <= 0:
            return []
        principal = min(principal, balance)
        balance -= principal
        rows.append(
            ScheduledPayment(
                due_date=add_months(as_of, len(rows) + 1),
                payment=quantize_cents(principal + interest),
                interest=quantize_cents(interest),
                principal=quantize_cents(principal),
                remaining_balance=quantize_cents(balance),
            )
        )
    return rows


__all__ = [
    "MAX_PAYOFF_MONTHS",
    "DebtSnapshot",
    "PayoffProjection",
    "PayoffStatus",
    "ScheduledPayment",
    "amortization_schedule",
    "project_payoff",
    "quantize_cents",
    "to_decimal",
]
