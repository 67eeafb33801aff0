"""SQLModel implementation of the notification repository."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import delete, func, update
from sqlmodel import select

from ...models.notification import Notification
from ..database import SessionFactory


class SQLModelNotificationRepository:
    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def create(self, notification: Notification) -> Notification:
        with self.session_factory() as session:
            session.add(notification)
            session.commit()
            session.refresh(notification)
            return notification

    def list_for_user(self, *, user_id: int, unread_only: bool = False) -> list[Notification]:
        """List notifications newest first."""
        with self.session_factory() as session:
            statement = select(Notification).where(Notification.user_id == user_id)
            if unread_only:
                statement = statement.where(Notification.is_read == False)  # noqa: E712
            statement = statement.order_by(
                Notification.created_at.desc(), Notification.id.desc()  # type: ignore
            )
            return list(session.exec(statement).all())

    def unread_count(self, *, user_id: int) -> int:
        with self.session_factory() as session:
            statement = select(func.count(Notification.id)).where(
                Notification.user_id == user_id,
                Notification.is_read == False,  # noqa: E712
            )
            return int(session.exec(statement).one())

    def mark_as_read(self, notification_id: int, *, user_id: int) -> Optional[Notification]:
        with self.session_factory() as session:
            notification = session.exec(
                select(Notification).where(
                    Notification.id == notification_id, Notification.user_id == user_id
                )
            ).first()
            if notification is None:
                return None
            notification.is_read = True
            session.add(notification)
            session.commit()
            session.refresh(notification)
            return notification

    def mark_all_as_read(self, *, user_id: int) -> int:
        """Mark every unread notification read; return how many changed."""
        with self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                update(Notification)
                .where(Notification.user_id == user_id)
                .where(Notification.is_read == False)  # noqa: E712
                .values(is_read=True)
            )
            session.commit()
            return result.rowcount

    def delete_older_than(self, *, days: int, now: datetime | None = None) -> int:
        """Delete notifications created more than ``days`` ago; return the count."""
        cutoff = (now or datetime.now()) - timedelta(days=days)
        with self.session_factory() as session:
            result = session.exec(  # type: ignore[call-overload]
                delete(Notification).where(Notification.created_at < cutoff)
            )
            session.commit()
            return result.rowcount
