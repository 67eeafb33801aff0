"""Calendar helpers shared by the payoff and budget-period calculators."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, time, timedelta

# Millisecond granularity: the next window starts exactly 1 ms after this.
END_OF_DAY = time(23, 59, 59, 999000)


def to_date(value: date | datetime) -> date:
    """Drop the time-of-day component, if any."""

    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: date | datetime) -> datetime:
    """Return ``value`` at 00:00:00.000."""

    return datetime.combine(to_date(value), time.min)


def end_of_day(value: date | datetime) -> datetime:
    """Return ``value`` at 23:59:59.999."""

    return datetime.combine(to_date(value), END_OF_DAY)


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's last day.

    ``add_months(date(2025, 1, 31), 1)`` is ``date(2025, 2, 28)``.
    Works for ``datetime`` values too; the time of day is preserved.
    """

    total = value.month - 1 + months
    year = value.year + total // 12
    month = total % 12 + 1
    day = min(value.day, days_in_month(year, month))
    return value.replace(year=year, month=month, day=day)


def add_years(value: date, years: int) -> date:
    """Add calendar years; Feb 29 becomes Feb 28 in non-leap targets."""

    return add_months(value, 12 * years)


__all__ = [
    "END_OF_DAY",
    "add_days",
    "add_months",
    "add_years",
    "days_in_month",
    "end_of_day",
    "start_of_day",
    "to_date",
]
