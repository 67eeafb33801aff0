"""SQLModel implementation of the expense category repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.category import ExpenseCategory
from ..database import SessionFactory


class SQLModelCategoryRepository:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get_by_id(self, category_id: int, *, user_id: int) -> Optional[ExpenseCategory]:
        with self.session_factory() as session:
            return session.exec(
                select(ExpenseCategory).where(
                    ExpenseCategory.id == category_id, ExpenseCategory.user_id == user_id
                )
            ).first()

    def create(self, category: ExpenseCategory, *, user_id: int) -> ExpenseCategory:
        with self.session_factory() as session:
            category.user_id = user_id
            session.add(category)
            session.commit()
            session.refresh(category)
            return category
