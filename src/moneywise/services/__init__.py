"""Service module exports."""

from . import amortization, budgeting, dates, debts, notifications, periods, reminders

__all__ = [
    "amortization",
    "budgeting",
    "dates",
    "debts",
    "notifications",
    "periods",
    "reminders",
]
