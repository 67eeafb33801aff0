"""Debt payoff projections and budget period accounting."""

from __future__ import annotations

from .config import BaseConfig
from .services.amortization import DebtSnapshot, PayoffProjection, PayoffStatus, project_payoff
from .services.periods import (
    BudgetPeriodSpec,
    BudgetWindow,
    InvalidPeriodKind,
    PeriodKind,
    compute_window,
    is_within_window,
)

__version__ = "0.1.0"

__all__ = [
    "BaseConfig",
    "BudgetPeriodSpec",
    "BudgetWindow",
    "DebtSnapshot",
    "InvalidPeriodKind",
    "PayoffProjection",
    "PayoffStatus",
    "PeriodKind",
    "compute_window",
    "is_within_window",
    "project_payoff",
]
