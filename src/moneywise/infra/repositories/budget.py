"""SQLModel implementation of the budget repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.budget import Budget
from ..database import SessionFactory


class SQLModelBudgetRepository:
    """SQLModel-based budget repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, budget_id: int, *, user_id: int) -> Optional[Budget]:
        """Retrieve a budget by ID."""
        with self.session_factory() as session:
            return session.exec(
                select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
            ).first()

    def get_active_for_category(self, category_id: int, *, user_id: int) -> Optional[Budget]:
        """Return the most recently started active budget for a category."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .where(Budget.user_id == user_id)
                .where(Budget.category_id == category_id)
                .where(Budget.is_active == True)  # noqa: E712
                .order_by(Budget.start_date.desc())  # type: ignore
            )
            return session.exec(statement).first()

    def list_active(self, *, user_id: int) -> list[Budget]:
        """List active budgets, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(Budget)
                .where(Budget.user_id == user_id)
                .where(Budget.is_active == True)  # noqa: E712
                .order_by(Budget.start_date, Budget.id)  # type: ignore
            )
            return list(session.exec(statement).all())

    def create(self, budget: Budget, *, user_id: int) -> Budget:
        """Create a new budget."""
        with self.session_factory() as session:
            budget.user_id = user_id
            session.add(budget)
            session.commit()
            session.refresh(budget)
            return budget

    def update(self, budget: Budget, *, user_id: int) -> Budget:
        """Update an existing budget."""
        with self.session_factory() as session:
            budget.user_id = user_id
            session.add(budget)
            session.commit()
            session.refresh(budget)
            return budget

    def delete(self, budget_id: int, *, user_id: int) -> bool:
        """Delete a budget by ID; return whether a row was removed."""
        with self.session_factory() as session:
            budget = session.exec(
                select(Budget).where(Budget.id == budget_id, Budget.user_id == user_id)
            ).first()
            if budget is None:
                return False
            session.delete(budget)
            session.commit()
            return True
