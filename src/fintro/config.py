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


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Fintro"
    DB_FILENAME = "fintro.db"
    LOG_FILENAME = "fintro.log"
    LOG_MAX_BYTES = 5 * 1024 * 1024
    LOG_BACKUP_COUNT = 3

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINTRO_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("FINTRO_DATABASE_URL", self._build_sqlite_url())
        self.CURRENCY_SYMBOL = os.getenv("FINTRO_CURRENCY_SYMBOL", "$")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the database and logs."""

        data_root = os.getenv("FINTRO_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            # Listener callbacks and dispatched writes run off the UI thread.
            return {"connect_args": {"check_same_thread": False}}
        return {}

