"""Builders for the in-app notifications raised by budgets and debts."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol

from ..models.notification import Notification, NotificationPriority, NotificationType
from .amortization import Amount, quantize_cents, to_decimal


class NotificationSink(Protocol):
    """Anything that can persist a notification."""

    def create(self, notification: Notification) -> Notification:  # pragma: no cover - interface
        ...


def _money(value: Amount) -> str:
    return f"${quantize_cents(to_decimal(value)):,.2f}"


def _plural_days(days: int) -> str:
    return f"{days} day{'s' if days != 1 else ''}"


def _percentage(spent: Decimal, amount: Decimal) -> Decimal:
    if amount <= 0:
        return Decimal("0.0")
    return (spent / amount * 100).quantize(Decimal("0.1"))


def budget_exceeded(
    *, user_id: int, category_name: str, budget_amount: Amount, spent_amount: Amount
) -> Notification:
    amount, spent = to_decimal(budget_amount), to_decimal(spent_amount)
    exceeded_by = quantize_cents(spent - amount)
    percentage = _percentage(spent, amount)
    return Notification(
        user_id=user_id,
        type=NotificationType.budget_exceeded.value,
        title="Budget Exceeded",
        message=(
            f"You've exceeded your {category_name} budget by {_money(exceeded_by)} ({percentage}%)"
        ),
        priority=NotificationPriority.high.value,
        icon="warning",
        action_url="/budgets",
        details={
            "category_name": category_name,
            "budget_amount": str(quantize_cents(amount)),
            "spent_amount": str(quantize_cents(spent)),
            "exceeded_by": str(exceeded_by),
        },
    )


def budget_warning(
    *, user_id: int, category_name: str, budget_amount: Amount, spent_amount: Amount
) -> Notification:
    amount, spent = to_decimal(budget_amount), to_decimal(spent_amount)
    remaining = quantize_cents(amount - spent)
    percentage = _percentage(spent, amount)
    return Notification(
        user_id=user_id,
        type=NotificationType.budget_warning.value,
        title="Budget Warning",
        message=(
            f"You've used {percentage}% of your {category_name} budget. "
            f"{_money(remaining)} remaining."
        ),
        priority=NotificationPriority.medium.value,
        icon="alert",
        action_url="/budgets",
        details={
            "category_name": category_name,
            "budget_amount": str(quantize_cents(amount)),
            "spent_amount": str(quantize_cents(spent)),
            "remaining": str(remaining),
        },
    )


def debt_due_soon(
    *, user_id: int, debt_name: str, due_date: date, amount: Amount, days_until_due: int
) -> Notification:
    """Reminder for an upcoming payment; urgent when it is due within a day."""
    if days_until_due == 0:
        message = f"Your {debt_name} payment of {_money(amount)} is due today"
    else:
        message = (
            f"Your {debt_name} payment of {_money(amount)} is due in "
            f"{_plural_days(days_until_due)}"
        )
    return Notification(
        user_id=user_id,
        type=NotificationType.debt_due_soon.value,
        title="Payment Due Soon",
        message=message,
        priority=(
            NotificationPriority.urgent.value
            if days_until_due <= 1
            else NotificationPriority.high.value
        ),
        icon="alert",
        action_url="/debts",
        details={
            "debt_name": debt_name,
            "due_date": due_date.isoformat(),
            "amount": str(quantize_cents(to_decimal(amount))),
            "days_until_due": days_until_due,
        },
    )


def debt_overdue(
    *, user_id: int, debt_name: str, amount: Amount, days_overdue: int
) -> Notification:
    return Notification(
        user_id=user_id,
        type=NotificationType.debt_overdue.value,
        title="Payment Overdue",
        message=(
            f"Your {debt_name} payment of {_money(amount)} is "
            f"{_plural_days(days_overdue)} overdue!"
        ),
        priority=NotificationPriority.urgent.value,
        icon="error",
        action_url="/debts",
        details={
            "debt_name": debt_name,
            "amount": str(quantize_cents(to_decimal(amount))),
            "days_overdue": days_overdue,
        },
    )


__all__ = [
    "NotificationSink",
    "budget_exceeded",
    "budget_warning",
    "debt_due_soon",
    "debt_overdue",
]
