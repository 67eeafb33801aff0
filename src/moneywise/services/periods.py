"""Budget period windows.

A budget is anchored on a start date and repeats weekly, monthly or yearly.
Every place that needs the ``[start, end]`` instants of a budget period
(creating or editing a budget, summing what was spent in it) goes through
:func:`compute_window` so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum

from .dates import add_days, add_months, end_of_day, start_of_day, to_date


class PeriodKind(str, Enum):
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class InvalidPeriodKind(ValueError):
    """Raised when a budget period is not one of weekly, monthly or yearly."""

    def __init__(self, value: object) -> None:
        self.value = value
        choices = ", ".join(kind.value for kind in PeriodKind)
        super().__init__(f"Invalid budget period {value!r}; expected one of: {choices}")


def parse_period_kind(value: PeriodKind | str) -> PeriodKind:
    """Return the :class:`PeriodKind` for ``value`` or raise ``InvalidPeriodKind``."""

    if isinstance(value, PeriodKind):
        return value
    try:
        return PeriodKind(value)
    except ValueError as exc:
        raise InvalidPeriodKind(value) from exc


@dataclass(frozen=True, slots=True)
class BudgetPeriodSpec:
    """Anchor date and recurrence of one budget period instance."""

    start_date: date | datetime
    period_kind: PeriodKind | str


@dataclass(frozen=True, slots=True)
class BudgetWindow:
    """Inclusive instants bounding a budget period."""

    start: datetime
    end: datetime

    def contains(self, instant: date | datetime) -> bool:
        return is_within_window(self, instant)


class PeriodOutOfRange(ValueError):
    """Raised when a budget period would run past ``date.max``."""

    def __init__(self, anchor: date) -> None:
        self.anchor = anchor
        super().__init__(
            f"Budget period anchored at {anchor.isoformat()} runs past {date.max.isoformat()}"
        )


# Days from one weekly window start to the next: the anchor plus seven more.
_WEEK_STRIDE = 8


def _bounds(anchor: date, kind: PeriodKind, index: int) -> tuple[date, date]:
    if kind is PeriodKind.weekly:
        # Seven days past the start, inclusive, as budgets have always been stored.
        first = add_days(anchor, _WEEK_STRIDE * index)
        return first, add_days(first, 7)
    step = 1 if kind is PeriodKind.monthly else 12
    first = add_months(anchor, step * index)
    return first, add_days(add_months(anchor, step * (index + 1)), -1)


def window_at(spec: BudgetPeriodSpec, index: int) -> BudgetWindow:
    """Return the ``index``-th window of the recurrence anchored at ``spec.start_date``.

    Monthly and yearly periods are counted from the anchor itself, so a budget
    anchored on Jan 31 starts on Feb 28, then Mar 31, then Apr 30; a Feb 29
    anchor comes back to Feb 29 in leap years. Consecutive windows tile.
    """

    kind = parse_period_kind(spec.period_kind)
    anchor = to_date(spec.start_date)
    try:
        first, last = _bounds(anchor, kind, index)
    except (OverflowError, ValueError) as exc:
        raise PeriodOutOfRange(anchor) from exc
    return BudgetWindow(start=start_of_day(first), end=end_of_day(last))


def compute_window(spec: BudgetPeriodSpec) -> BudgetWindow:
    """Return the window for the period anchored at ``spec.start_date``.

    * weekly: anchor through anchor + 7 days
    * monthly: anchor through the day before the same day next month
      (month-end clamped, so Jan 31 runs through Feb 27 in a common year)
    * yearly: anchor through the day before the same date next year
      (Feb 29 anchors roll to Feb 28)

    ``start`` is at 00:00:00.000 and ``end`` at 23:59:59.999. Any anchor whose
    window ends by ``date.max`` is supported; later ones raise
    :class:`PeriodOutOfRange`.
    """

    return window_at(spec, 0)


def is_within_window(window: BudgetWindow, instant: date | datetime) -> bool:
    """Return True when ``window.start <= instant <= window.end``.

    A bare ``date`` is compared as its start of day.
    """

    if not isinstance(instant, datetime):
        instant = start_of_day(instant)
    return window.start <= instant <= window.end


def _lower_index(anchor: date, kind: PeriodKind, day: date) -> int:
    """An index no greater than that of the window containing ``day``."""

    if kind is PeriodKind.weekly:
        return max(0, (day - anchor).days // _WEEK_STRIDE - 1)
    months = (day.year - anchor.year) * 12 + day.month - anchor.month
    step = 1 if kind is PeriodKind.monthly else 12
    return max(0, months // step - 1)


def current_window(spec: BudgetPeriodSpec, today: date | datetime) -> BudgetWindow:
    """Return the window of the anchored recurrence that contains ``today``.

    When ``today`` precedes the anchor the anchor's own window is returned.
    """

    kind = parse_period_kind(spec.period_kind)
    instant = today if isinstance(today, datetime) else start_of_day(today)
    index = _lower_index(to_date(spec.start_date), kind, instant.date())
    window = window_at(spec, index)
    while window.end < instant:
        index += 1
        window = window_at(spec, index)
    return window


def next_window(
    window: BudgetWindow,
    period_kind: PeriodKind | str,
    *,
    anchor: date | datetime | None = None,
) -> BudgetWindow:
    """Return the window that begins 1 ms after ``window`` ends.

    Pass the budget's ``anchor`` to keep month-end and leap-day anchors on
    their day; ``window`` must then belong to that anchor's recurrence.
    Without it the following period is anchored on its own first day.
    """

    try:
        following = window.end + timedelta(milliseconds=1)
    except OverflowError as exc:
        raise PeriodOutOfRange(to_date(window.start)) from exc
    spec = BudgetPeriodSpec(
        start_date=anchor if anchor is not None else following, period_kind=period_kind
    )
    return current_window(spec, following)


__all__ = [
    "BudgetPeriodSpec",
    "BudgetWindow",
    "InvalidPeriodKind",
    "PeriodKind",
    "PeriodOutOfRange",
    "compute_window",
    "current_window",
    "is_within_window",
    "next_window",
    "parse_period_kind",
    "window_at",
]
