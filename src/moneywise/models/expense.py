"""SQLModel definition for recorded expenses."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Expense(SQLModel, table=True):
    """A single expense; budgets sum these over their period window."""

    __tablename__: ClassVar[str] = "expense"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    category_id: int = Field(foreign_key="expense_category.id", nullable=False, index=True)
    amount: float = Field(nullable=False, gt=0)
    description: str = Field(default="", max_length=200)
    occurred_at: datetime = Field(nullable=False, index=True)
    payment_method: str = Field(default="card", max_length=32)
