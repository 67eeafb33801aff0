"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: float, *, minimum: float, maximum: float) -> float:
    """Read a bounded number from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if not minimum <= value <= maximum:
        raise ValueError(f"{name} must be between {minimum:g} and {maximum:g}, got {value:g}")
    return value


class BaseConfig:
    """Configuration shared by the CLI, the scheduler and tests."""

    APP_NAME = "moneywise"
    DB_FILENAME = "moneywise.db"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("MONEYWISE_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("MONEYWISE_DATABASE_URL", self._build_sqlite_url())
        self.REMINDER_HOUR = int(
            _env_number("MONEYWISE_REMINDER_HOUR", 9, minimum=0, maximum=23)
        )
        self.BUDGET_ALERT_THRESHOLD = _env_number(
            "MONEYWISE_BUDGET_ALERT_THRESHOLD", 80.0, minimum=0, maximum=100
        )
        self.NOTIFICATION_RETENTION_DAYS = int(
            _env_number("MONEYWISE_NOTIFICATION_RETENTION_DAYS", 30, minimum=1, maximum=3650)
        )

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        path = Path(os.getenv("MONEYWISE_DATA_DIR", "instance")).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {"pool_pre_ping": True}


__all__ = ["BaseConfig"]
