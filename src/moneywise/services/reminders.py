"""Upcoming-payment reminders for active debts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Protocol

from ..logging_config import get_logger
from ..models.debt import Debt, DebtStatus
from .amortization import to_decimal
from .dates import add_days, add_months, days_in_month
from .notifications import NotificationSink, debt_due_soon, debt_overdue

logger = get_logger("services.reminders")


class ReminderDebtSource(Protocol):
    def list_reminder_candidates(
        self, *, user_id: int | None = None
    ) -> list[Debt]:  # pragma: no cover - interface
        ...


def due_date_in_month(year: int, month: int, due_day: int) -> date:
    """The due date for a month; due days past the month end fall on its last day."""

    return date(year, month, min(due_day, days_in_month(year, month)))


def next_payment_date(due_day: int, today: date) -> date:
    """This month's due date unless it already passed, else next month's."""

    this_month = due_date_in_month(today.year, today.month, due_day)
    if today <= this_month:
        return this_month
    following = add_months(today.replace(day=1), 1)
    return due_date_in_month(following.year, following.month, due_day)


def last_due_date(due_day: int, today: date) -> date:
    """The most recent due date strictly before ``today``."""

    this_month = due_date_in_month(today.year, today.month, due_day)
    if this_month < today:
        return this_month
    previous = add_months(today.replace(day=1), -1)
    return due_date_in_month(previous.year, previous.month, due_day)


def days_overdue(debt: Debt, today: date) -> Optional[int]:
    """Days since a missed due date, or ``None`` when the debt is current.

    A due date counts as missed when no payment was recorded in the billing
    cycle ending on it. Debts that started after that due date are current.
    """

    missed = last_due_date(debt.due_day, today)
    cycle_start = add_days(add_months(missed, -1), 1)
    if debt.start_date > missed:
        return None
    if debt.last_payment_date is not None and debt.last_payment_date >= cycle_start:
        return None
    return (today - missed).days


@dataclass(frozen=True, slots=True)
class PaymentReminder:
    debt_id: int | None
    user_id: int
    name: str
    debt_type: str
    minimum_payment: Decimal
    due_date: date
    days_until_due: int

    @property
    def message(self) -> str:
        if self.days_until_due == 0:
            return f"Payment due today for {self.name}!"
        suffix = "s" if self.days_until_due > 1 else ""
        return f"Payment for {self.name} due in {self.days_until_due} day{suffix}"


def _is_candidate(debt: Debt) -> bool:
    return debt.status == DebtStatus.active.value and bool(debt.reminder_enabled)


def reminder_for(debt: Debt, today: date) -> Optional[PaymentReminder]:
    """Return a reminder when the next payment falls inside the debt's reminder window."""

    if not _is_candidate(debt):
        return None
    due = next_payment_date(debt.due_day, today)
    days_until_due = (due - today).days
    if not 0 <= days_until_due <= debt.reminder_days_before:
        return None
    return PaymentReminder(
        debt_id=debt.id,
        user_id=debt.user_id,
        name=debt.name,
        debt_type=debt.debt_type,
        minimum_payment=to_decimal(debt.minimum_payment),
        due_date=due,
        days_until_due=days_until_due,
    )


def upcoming_reminders(debts: Iterable[Debt], today: date | None = None) -> list[PaymentReminder]:
    today = today or date.today()
    reminders = [reminder_for(debt, today) for debt in debts]
    return sorted(
        (r for r in reminders if r is not None), key=lambda r: (r.days_until_due, r.name)
    )


@dataclass(frozen=True, slots=True)
class ReminderRunResult:
    sent: int
    skipped: int

    @property
    def checked(self) -> int:
        return self.sent + self.skipped


class ReminderService:
    """Turns due and overdue debt payments into notifications."""

    def __init__(self, *, debts: ReminderDebtSource, notifications: NotificationSink) -> None:
        self.debts = debts
        self.notifications = notifications

    def _notify(self, debt: Debt, today: date) -> bool:
        overdue = days_overdue(debt, today)
        if overdue is not None:
            self.notifications.create(
                debt_overdue(
                    user_id=debt.user_id,
                    debt_name=debt.name,
                    amount=debt.minimum_payment,
                    days_overdue=overdue,
                )
            )
            logger.info("Overdue notice created", extra={"debt_id": debt.id, "days": overdue})
            return True

        reminder = reminder_for(debt, today)
        if reminder is None:
            return False
        self.notifications.create(
            debt_due_soon(
                user_id=debt.user_id,
                debt_name=debt.name,
                due_date=reminder.due_date,
                amount=debt.minimum_payment,
                days_until_due=reminder.days_until_due,
            )
        )
        logger.info(
            "Payment reminder created",
            extra={"debt_id": debt.id, "days": reminder.days_until_due},
        )
        return True

    def run(self, today: date | None = None, *, user_id: int | None = None) -> ReminderRunResult:
        """Check every active, reminder-enabled debt once.

        A failure for one debt is logged and counted as skipped; the run
        carries on with the rest.
        """

        today = today or date.today()
        debts = self.debts.list_reminder_candidates(user_id=user_id)
        sent = skipped = 0
        for debt in debts:
            try:
                notified = self._notify(debt, today)
            except Exception:
                logger.exception("Failed to create reminder", extra={"debt_id": debt.id})
                notified = False
            if notified:
                sent += 1
            else:
                skipped += 1

        result = ReminderRunResult(sent=sent, skipped=skipped)
        logger.info(
            "Debt reminder check complete",
            extra={"sent": sent, "skipped": skipped, "checked": len(debts)},
        )
        return result


__all__ = [
    "PaymentReminder",
    "ReminderRunResult",
    "ReminderService",
    "days_overdue",
    "last_due_date",
    "next_payment_date",
    "reminder_for",
    "upcoming_reminders",
]
