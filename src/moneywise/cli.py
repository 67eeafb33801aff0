"""Command line entry points."""

from __future__ import annotations

from datetime import date, datetime

import click

from .config import BaseConfig
from .infra.database import bootstrap_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelCategoryRepository,
    SQLModelDebtRepository,
    SQLModelExpenseRepository,
    SQLModelNotificationRepository,
)
from .logging_config import setup_logging
from .services.amortization import (
    DebtSnapshot,
    amortization_schedule,
    project_payoff,
    quantize_cents,
)
from .services.budgeting import BudgetService
from .services.periods import (
    BudgetPeriodSpec,
    InvalidPeriodKind,
    PeriodOutOfRange,
    compute_window,
)
from .services.reminders import ReminderService

_DATE = click.DateTime(formats=["%Y-%m-%d"])


def _as_date(value: datetime | None) -> date:
    return value.date() if value is not None else date.today()


@click.group()
def main() -> None:
    """Debt payoff projections and budget period windows."""


@main.command()
@click.option("--balance", required=True, type=str, help="Current balance")
@click.option("--rate", required=True, type=str, help="Annual interest rate, percent")
@click.option("--minimum", required=True, type=str, help="Monthly minimum payment")
@click.option("--as-of", type=_DATE, default=None, help="Evaluation date (YYYY-MM-DD)")
@click.option("--schedule", "show_schedule", is_flag=True, help="Print every projected month")
def payoff(
    balance: str, rate: str, minimum: str, as_of: datetime | None, show_schedule: bool
) -> None:
    """Project when a debt is paid off at its minimum payment."""

    try:
        snapshot = DebtSnapshot(balance, rate, minimum)
    except ArithmeticError as exc:
        raise click.BadParameter("amounts must be decimal numbers") from exc

    start = _as_date(as_of)
    projection = project_payoff(snapshot, start)
    if not projection.achievable:
        click.echo(f"Not achievable ({projection.status.value})")
        return
    click.echo(
        f"Paid off in {projection.months_to_payoff} months "
        f"on {projection.projected_payoff_date.isoformat()}"
    )
    if show_schedule:
        for row in amortization_schedule(snapshot, start):
            click.echo(
                f"{row.due_date.isoformat()}  payment={row.payment}  interest={row.interest}  "
                f"principal={row.principal}  balance={row.remaining_balance}"
            )


@main.command()
@click.option("--start", "start_date", required=True, type=_DATE, help="Anchor date (YYYY-MM-DD)")
@click.option("--period", required=True, help="weekly, monthly or yearly")
def window(start_date: datetime, period: str) -> None:
    """Print the inclusive window of a budget period."""

    try:
        result = compute_window(BudgetPeriodSpec(start_date=start_date, period_kind=period))
    except InvalidPeriodKind as exc:
        raise click.BadParameter(str(exc), param_hint="--period") from exc
    except PeriodOutOfRange as exc:
        raise click.BadParameter(str(exc), param_hint="--start") from exc
    start = result.start.isoformat(timespec="milliseconds")
    end = result.end.isoformat(timespec="milliseconds")
    click.echo(f"{start} -> {end}")


@main.command()
@click.option("--user-id", required=True, type=int, help="Owner of the budgets")
@click.option("--as-of", type=_DATE, default=None, help="Report the period containing this date")
def budgets(user_id: int, as_of: datetime | None) -> None:
    """Show spending against each active budget for its current period."""

    config = BaseConfig()
    setup_logging(config)
    _, session_factory = bootstrap_database(config)
    service = BudgetService(
        budgets=SQLModelBudgetRepository(session_factory),
        expenses=SQLModelExpenseRepository(session_factory),
        categories=SQLModelCategoryRepository(session_factory),
        notifications=SQLModelNotificationRepository(session_factory),
        alert_threshold=config.BUDGET_ALERT_THRESHOLD,
    )
    try:
        usages = service.list_usage(user_id=user_id, as_of=as_of or datetime.now())
    except (InvalidPeriodKind, PeriodOutOfRange) as exc:
        raise click.ClickException(f"Cannot report budgets: {exc}") from exc
    if not usages:
        click.echo("No active budgets")
        return
    for usage in usages:
        click.echo(
            f"{usage.window.start.date().isoformat()} -> {usage.window.end.date().isoformat()}  "
            f"category={usage.category_id}  spent={usage.spent}  "
            f"amount={quantize_cents(usage.amount)}  used={usage.percentage_used:.1f}%"
        )


@main.command()
@click.option("--today", type=_DATE, default=None, help="Pretend today is this date")
def remind(today: datetime | None) -> None:
    """Create due-soon and overdue notifications for all active debts."""

    config = BaseConfig()
    setup_logging(config)
    _, session_factory = bootstrap_database(config)
    service = ReminderService(
        debts=SQLModelDebtRepository(session_factory),
        notifications=SQLModelNotificationRepository(session_factory),
    )
    result = service.run(_as_date(today))
    click.echo(f"Sent {result.sent} reminder(s), skipped {result.skipped}")


if __name__ == "__main__":  # pragma: no cover
    main()
