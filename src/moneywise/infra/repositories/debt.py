"""SQLModel implementation of the debt repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.debt import Debt, DebtStatus
from ..database import SessionFactory


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, debt_id: int, *, user_id: int) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            return session.exec(
                select(Debt).where(Debt.id == debt_id, Debt.user_id == user_id)
            ).first()

    def list_all(self, *, user_id: int) -> list[Debt]:
        """List debts by due day, largest balance first within a day."""
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.user_id == user_id)
                .order_by(Debt.due_day, Debt.current_balance.desc())  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_active(self, *, user_id: int) -> list[Debt]:
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.user_id == user_id)
                .where(Debt.status == DebtStatus.active.value)
                .order_by(Debt.due_day)  # type: ignore
            )
            return list(session.exec(statement).all())

    def list_reminder_candidates(self, *, user_id: int | None = None) -> list[Debt]:
        """Active debts with reminders enabled, across all users unless ``user_id`` is given."""
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.status == DebtStatus.active.value)
                .where(Debt.reminder_enabled == True)  # noqa: E712
            )
            if user_id is not None:
                statement = statement.where(Debt.user_id == user_id)
            return list(session.exec(statement.order_by(Debt.id)).all())  # type: ignore

    def create(self, debt: Debt, *, user_id: int) -> Debt:
        with self.session_factory() as session:
            debt.user_id = user_id
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt

    def update(self, debt: Debt, *, user_id: int) -> Debt:
        with self.session_factory() as session:
            debt.user_id = user_id
            session.add(debt)
            session.commit()
            session.refresh(debt)
            return debt

    def delete(self, debt_id: int, *, user_id: int) -> bool:
        """Delete a debt by ID; return whether a row was removed."""
        with self.session_factory() as session:
            debt = session.exec(
                select(Debt).where(Debt.id == debt_id, Debt.user_id == user_id)
            ).first()
            if debt is None:
                return False
            session.delete(debt)
            session.commit()
            return True
