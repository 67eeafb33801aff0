"""SQLModel repository implementations."""

from .budget import SQLModelBudgetRepository
from .category import SQLModelCategoryRepository
from .debt import SQLModelDebtRepository
from .expense import SQLModelExpenseRepository
from .notification import SQLModelNotificationRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelCategoryRepository",
    "SQLModelDebtRepository",
    "SQLModelExpenseRepository",
    "SQLModelNotificationRepository",
]
