"""In-app notifications raised by budget checks and debt reminders."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class NotificationType(str, Enum):
    budget_exceeded = "budget_exceeded"
    budget_warning = "budget_warning"
    debt_due_soon = "debt_due_soon"
    debt_overdue = "debt_overdue"
    system = "system"


class NotificationPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class Notification(SQLModel, table=True):
    __tablename__: ClassVar[str] = "notification"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    type: str = Field(nullable=False, max_length=32)
    title: str = Field(nullable=False, max_length=100)
    message: str = Field(nullable=False, max_length=500)
    priority: str = Field(default=NotificationPriority.medium.value, max_length=16)
    is_read: bool = Field(default=False, nullable=False, index=True)
    details: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    action_url: str = Field(default="", max_length=200)
    icon: str = Field(default="info", max_length=16)
    created_at: datetime = Field(default_factory=datetime.now, nullable=False, index=True)
