"""SQLModel implementation of the expense repository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func
from sqlmodel import select

from ...models.expense import Expense
from ..database import SessionFactory


class SQLModelExpenseRepository:
    """Expense storage; also the spent-amount source for budgets."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def create(self, expense: Expense, *, user_id: int) -> Expense:
        with self.session_factory() as session:
            expense.user_id = user_id
            session.add(expense)
            session.commit()
            session.refresh(expense)
            return expense

    def list_between(self, start: datetime, end: datetime, *, user_id: int) -> list[Expense]:
        """List expenses with ``start <= occurred_at <= end``, newest first."""
        with self.session_factory() as session:
            statement = (
                select(Expense)
                .where(Expense.user_id == user_id)
                .where(Expense.occurred_at >= start, Expense.occurred_at <= end)
                .order_by(Expense.occurred_at.desc())  # type: ignore
            )
            return list(session.exec(statement).all())

    def sum_expenses(
        self, *, user_id: int, category_id: int, start: datetime, end: datetime
    ) -> Decimal:
        """Sum expense amounts for a category with ``start <= occurred_at <= end``."""
        with self.session_factory() as session:
            statement = select(func.coalesce(func.sum(Expense.amount), 0.0)).where(
                Expense.user_id == user_id,
                Expense.category_id == category_id,
                Expense.occurred_at >= start,
                Expense.occurred_at <= end,
            )
            total = session.exec(statement).one()
            return Decimal(str(total)).quantize(Decimal("0.01"))
