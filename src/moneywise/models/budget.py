"""Budgeting tables."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Budget(SQLModel, table=True):
    """Spending limit for one expense category over a recurring period.

    ``start_date``/``end_date`` hold the window computed by
    ``services.periods.compute_window`` for ``period``.
    """

    __tablename__: ClassVar[str] = "budget"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    category_id: int = Field(foreign_key="expense_category.id", nullable=False, index=True)
    amount: float = Field(nullable=False, ge=0)
    period: str = Field(default="monthly", nullable=False, max_length=16)
    start_date: datetime = Field(nullable=False)
    end_date: datetime = Field(nullable=False)
    alert_threshold: float = Field(default=80.0, ge=0, le=100)
    is_active: bool = Field(default=True, nullable=False, index=True)
    notes: str = Field(default="", max_length=500)
