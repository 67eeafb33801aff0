"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Protocol

from ..errors import RecordNotFound
from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.category import ExpenseCategory
from .amortization import Amount, quantize_cents, to_decimal
from .notifications import NotificationSink, budget_exceeded, budget_warning
from .periods import (
    BudgetPeriodSpec,
    BudgetWindow,
    PeriodKind,
    compute_window,
    current_window,
    parse_period_kind,
)

logger = get_logger("services.budgeting")

DEFAULT_ALERT_THRESHOLD = 80.0


class ExpenseStore(Protocol):
    """Source of spent amounts for a budget window."""

    def sum_expenses(
        self, *, user_id: int, category_id: int, start: datetime, end: datetime
    ) -> Decimal:  # pragma: no cover - interface
        """Return the total expense amount with ``start <= occurred_at <= end``."""
        ...


class BudgetRepository(Protocol):
    def get_by_id(self, budget_id: int, *, user_id: int) -> Optional[Budget]:  # pragma: no cover
        ...

    def get_active_for_category(
        self, category_id: int, *, user_id: int
    ) -> Optional[Budget]:  # pragma: no cover
        ...

    def list_active(self, *, user_id: int) -> list[Budget]:  # pragma: no cover
        ...

    def create(self, budget: Budget, *, user_id: int) -> Budget:  # pragma: no cover
        ...

    def update(self, budget: Budget, *, user_id: int) -> Budget:  # pragma: no cover
        ...


class CategoryLookup(Protocol):
    def get_by_id(
        self, category_id: int, *, user_id: int
    ) -> Optional[ExpenseCategory]:  # pragma: no cover
        ...


class BudgetAlertLevel(str, Enum):
    none = "none"
    warning = "warning"
    exceeded = "exceeded"


@dataclass(frozen=True, slots=True)
class BudgetUsage:
    """How much of a budget has been spent in its current window."""

    budget_id: int | None
    category_id: int
    amount: Decimal
    spent: Decimal
    window: BudgetWindow

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0"), self.amount - self.spent)

    @property
    def percentage_used(self) -> Decimal:
        if self.amount <= 0:
            return Decimal("0")
        return self.spent / self.amount * 100

    @property
    def is_exceeded(self) -> bool:
        return self.spent > self.amount


def window_for(budget: Budget, as_of: date | datetime | None = None) -> BudgetWindow:
    """The window a stored budget covers, recomputed from its anchor and period.

    With ``as_of`` the window is rolled forward to the period containing it,
    so a budget created months ago reports on the current period.
    """

    spec = BudgetPeriodSpec(start_date=budget.start_date, period_kind=budget.period)
    if as_of is None:
        return compute_window(spec)
    return current_window(spec, as_of)


def compute_usage(
    budget: Budget, store: ExpenseStore, *, as_of: date | datetime | None = None
) -> BudgetUsage:
    """Sum what was spent in ``budget``'s category over its window."""

    window = window_for(budget, as_of)
    spent = store.sum_expenses(
        user_id=budget.user_id,
        category_id=budget.category_id,
        start=window.start,
        end=window.end,
    )
    return BudgetUsage(
        budget_id=budget.id,
        category_id=budget.category_id,
        amount=to_decimal(budget.amount),
        spent=quantize_cents(to_decimal(spent)),
        window=window,
    )


def classify_usage(
    usage: BudgetUsage, alert_threshold: float = DEFAULT_ALERT_THRESHOLD
) -> BudgetAlertLevel:
    """Exceeded once spending passes the amount, warning from the threshold percentage."""

    if usage.is_exceeded:
        return BudgetAlertLevel.exceeded
    if usage.amount > 0 and usage.percentage_used >= to_decimal(alert_threshold):
        return BudgetAlertLevel.warning
    return BudgetAlertLevel.none


class BudgetService:
    """Create budgets, report their usage and raise threshold notifications."""

    def __init__(
        self,
        *,
        budgets: BudgetRepository,
        expenses: ExpenseStore,
        categories: CategoryLookup,
        notifications: NotificationSink,
        alert_threshold: float = DEFAULT_ALERT_THRESHOLD,
    ) -> None:
        self.budgets = budgets
        self.expenses = expenses
        self.categories = categories
        self.notifications = notifications
        self.alert_threshold = alert_threshold

    def create_budget(
        self,
        *,
        user_id: int,
        category_id: int,
        amount: Amount,
        period: PeriodKind | str = PeriodKind.monthly,
        start_date: date | datetime | None = None,
        alert_threshold: float | None = None,
        notes: str = "",
    ) -> Budget:
        """Persist a budget whose window starts on ``start_date`` (today by default).

        ``alert_threshold`` falls back to the service-wide default.
        """

        kind = parse_period_kind(period)
        window = compute_window(
            BudgetPeriodSpec(start_date=start_date or date.today(), period_kind=kind)
        )
        budget = Budget(
            user_id=user_id,
            category_id=category_id,
            amount=float(to_decimal(amount)),
            period=kind.value,
            start_date=window.start,
            end_date=window.end,
            alert_threshold=(
                alert_threshold if alert_threshold is not None else self.alert_threshold
            ),
            notes=notes,
        )
        created = self.budgets.create(budget, user_id=user_id)
        logger.info(
            "Budget created",
            extra={"budget_id": created.id, "period": kind.value, "end_date": window.end},
        )
        return created

    def update_budget(
        self,
        budget_id: int,
        *,
        user_id: int,
        category_id: int | None = None,
        amount: Amount | None = None,
        period: PeriodKind | str | None = None,
        start_date: date | datetime | None = None,
        alert_threshold: float | None = None,
        notes: str | None = None,
    ) -> Budget:
        """Apply changes and recompute the stored window from anchor and period."""

        budget = self.budgets.get_by_id(budget_id, user_id=user_id)
        if budget is None:
            raise RecordNotFound("Budget", budget_id)

        kind = parse_period_kind(period if period is not None else budget.period)
        window = compute_window(
            BudgetPeriodSpec(start_date=start_date or budget.start_date, period_kind=kind)
        )
        if category_id is not None:
            budget.category_id = category_id
        if amount is not None:
            budget.amount = float(to_decimal(amount))
        if alert_threshold is not None:
            budget.alert_threshold = alert_threshold
        if notes is not None:
            budget.notes = notes
        budget.period = kind.value
        budget.start_date = window.start
        budget.end_date = window.end
        return self.budgets.update(budget, user_id=user_id)

    def list_usage(
        self, *, user_id: int, as_of: date | datetime | None = None
    ) -> list[BudgetUsage]:
        budgets = self.budgets.list_active(user_id=user_id)
        return [compute_usage(budget, self.expenses, as_of=as_of) for budget in budgets]

    def check_alerts(
        self, *, user_id: int, category_id: int, as_of: date | datetime | None = None
    ) -> BudgetAlertLevel:
        """Notify when the category's active budget is past its threshold.

        Meant to run after an expense is recorded; pass the expense time as
        ``as_of`` to judge the period it fell in. Categories without an
        active budget report ``BudgetAlertLevel.none``.
        """

        budget = self.budgets.get_active_for_category(category_id, user_id=user_id)
        if budget is None:
            return BudgetAlertLevel.none

        usage = compute_usage(budget, self.expenses, as_of=as_of)
        level = classify_usage(usage, budget.alert_threshold)
        if level is BudgetAlertLevel.none:
            return level

        category = self.categories.get_by_id(category_id, user_id=user_id)
        category_name = category.name if category is not None else f"category {category_id}"
        builder = budget_exceeded if level is BudgetAlertLevel.exceeded else budget_warning
        self.notifications.create(
            builder(
                user_id=user_id,
                category_name=category_name,
                budget_amount=usage.amount,
                spent_amount=usage.spent,
            )
        )
        logger.info(
            "Budget alert raised",
            extra={
                "budget_id": budget.id,
                "level": level.value,
                "spent": str(usage.spent),
                "amount": str(usage.amount),
            },
        )
        return level


__all__ = [
    "BudgetAlertLevel",
    "BudgetService",
    "BudgetUsage",
    "ExpenseStore",
    "classify_usage",
    "compute_usage",
    "window_for",
]
