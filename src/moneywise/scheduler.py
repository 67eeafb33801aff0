"""Background jobs: the daily debt reminder run and notification cleanup."""

from __future__ import annotations

from datetime import date
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import BaseConfig
from .infra.database import SessionFactory
from .infra.repositories import SQLModelDebtRepository, SQLModelNotificationRepository
from .logging_config import get_logger
from .services.reminders import ReminderRunResult, ReminderService

logger = get_logger("scheduler")


class ReminderScheduler:
    """Owns the recurring jobs; the services it calls hold no scheduler state."""

    def __init__(
        self,
        config: BaseConfig,
        session_factory: SessionFactory,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.config = config
        self.today = today
        self.debts = SQLModelDebtRepository(session_factory)
        self.notifications = SQLModelNotificationRepository(session_factory)
        self.scheduler = BackgroundScheduler()

    def run_reminders(self) -> ReminderRunResult:
        """Run one reminder pass; failures are logged, never raised into the scheduler."""
        service = ReminderService(debts=self.debts, notifications=self.notifications)
        try:
            return service.run(self.today())
        except Exception:
            logger.exception("Debt reminder run failed")
            return ReminderRunResult(sent=0, skipped=0)

    def purge_notifications(self) -> int:
        days = self.config.NOTIFICATION_RETENTION_DAYS
        removed = self.notifications.delete_older_than(days=days)
        logger.info("Old notifications removed", extra={"removed": removed, "days": days})
        return removed

    def configure_jobs(self, *, run_on_start: bool = True) -> None:
        """Register jobs; the reminder run also fires once at start when requested."""
        self.scheduler.add_job(
            func=self.run_reminders,
            trigger=CronTrigger(hour=self.config.REMINDER_HOUR, minute=0),
            id="debt_reminders",
            name="Daily Debt Reminders",
            replace_existing=True,
            misfire_grace_time=3600,
        )
        self.scheduler.add_job(
            func=self.purge_notifications,
            trigger=CronTrigger(hour=3, minute=30),
            id="notification_cleanup",
            name="Notification Retention Cleanup",
            replace_existing=True,
        )
        if run_on_start:
            self.scheduler.add_job(
                func=self.run_reminders,
                id="debt_reminders_startup",
                name="Startup Debt Reminders",
                replace_existing=True,
            )
        logger.info(
            "Scheduled debt reminders",
            extra={"hour": self.config.REMINDER_HOUR, "run_on_start": run_on_start},
        )

    def start(self, *, run_on_start: bool = True) -> None:
        if self.scheduler.running:
            logger.warning("Scheduler already running")
            return
        self.configure_jobs(run_on_start=run_on_start)
        self.scheduler.start()
        logger.info("Background scheduler started")

    def stop(self) -> None:
        """Stop the background scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            logger.info("Background scheduler stopped")
