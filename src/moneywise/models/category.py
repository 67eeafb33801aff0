"""Expense category definitions."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class ExpenseCategory(SQLModel, table=True):
    """Category that expenses are filed under and budgets are set against."""

    __tablename__: ClassVar[str] = "expense_category"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=64)
    color: Optional[str] = Field(default=None, max_length=7)
