"""SQLModel table exports."""

from .budget import Budget
from .category import ExpenseCategory
from .debt import Debt, DebtStatus, DebtType
from .expense import Expense
from .notification import Notification, NotificationPriority, NotificationType
from .user import User

__all__ = [
    "Budget",
    "Debt",
    "DebtStatus",
    "DebtType",
    "Expense",
    "ExpenseCategory",
    "Notification",
    "NotificationPriority",
    "NotificationType",
    "User",
]
