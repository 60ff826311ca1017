"""Configuration loading for coursereg."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_DB_PATH = "coursereg.db"
DEFAULT_CREDIT_CAP = 9
DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is invalid."""


@dataclass(frozen=True)
class Settings:
    """Runtime settings.

    Attributes:
        db_path: SQLite database file. Ignored when db_url is set.
        db_url: Full SQLAlchemy URL for a non-SQLite relational store.
        credit_cap: Maximum total credit hours a learner may hold.
        log_dir: Directory for the rotating registrar log.
        log_level: Level name for the coursereg loggers.
    """

    db_path: str = DEFAULT_DB_PATH
    db_url: str | None = None
    credit_cap: int = DEFAULT_CREDIT_CAP
    log_dir: str = DEFAULT_LOG_DIR
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        """Create settings from a mapping.

        Args:
            data: Mapping with optional keys db_path, db_url, credit_cap,
                log_dir, log_level.

        Returns:
            Parsed settings.

        Raises:
            ConfigError: If credit_cap is not a non-negative integer or
                log_level is not a known level name.
        """
        raw_cap = data.get("credit_cap", DEFAULT_CREDIT_CAP)
        try:
            credit_cap = int(raw_cap)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"credit_cap must be an integer, got {raw_cap!r}") from e
        if credit_cap < 0:
            raise ConfigError(f"credit_cap must be >= 0, got {credit_cap}")

        log_level = (data.get("log_level") or DEFAULT_LOG_LEVEL).upper()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            db_path=data.get("db_path") or DEFAULT_DB_PATH,
            db_url=data.get("db_url") or None,
            credit_cap=credit_cap,
            log_dir=data.get("log_dir") or DEFAULT_LOG_DIR,
            log_level=log_level,
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Create settings from COURSEREG_* environment variables."""
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {
            "db_path": env.get("COURSEREG_DB_PATH"),
            "db_url": env.get("COURSEREG_DB_URL"),
            "log_dir": env.get("COURSEREG_LOG_DIR"),
            "log_level": env.get("COURSEREG_LOG_LEVEL"),
        }
        if "COURSEREG_CREDIT_CAP" in env:
            data["credit_cap"] = env["COURSEREG_CREDIT_CAP"]
        return cls.from_dict(data)
