"""Debt entities."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class DebtType(str, Enum):
    student_loan = "student_loan"
    credit_card = "credit_card"
    personal_loan = "personal_loan"
    mortgage = "mortgage"
    auto_loan = "auto_loan"
    medical = "medical"
    other = "other"


class DebtStatus(str, Enum):
    active = "active"
    paid_off = "paid_off"
    defaulted = "defaulted"
    deferred = "deferred"


class Debt(SQLModel, table=True):
    """Installment or revolving debt with its projected payoff date."""

    __tablename__: ClassVar[str] = "debt"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=100)
    debt_type: str = Field(default=DebtType.other.value, nullable=False, max_length=32)
    principal: float = Field(nullable=False, ge=0)
    current_balance: float = Field(nullable=False, ge=0)
    interest_rate: float = Field(default=0.0, ge=0, le=100, description="Annual rate, percent")
    minimum_payment: float = Field(default=0.0, ge=0)
    due_day: int = Field(default=1, ge=1, le=31, description="Day of month the payment is due")
    start_date: date = Field(nullable=False)
    payoff_date: Optional[date] = Field(default=None)
    estimated_payoff_date: Optional[date] = Field(default=None)
    lender: str = Field(default="", max_length=100)
    status: str = Field(default=DebtStatus.active.value, nullable=False, max_length=16, index=True)
    reminder_enabled: bool = Field(default=True, nullable=False)
    reminder_days_before: int = Field(default=3, ge=0)
    last_payment_date: Optional[date] = Field(default=None)
    last_payment_amount: Optional[float] = Field(default=None, ge=0)
    total_paid: float = Field(default=0.0, ge=0)
    notes: str = Field(default="", max_length=500)
