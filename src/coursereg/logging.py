"""Registrar logging.

All coursereg modules log under the ``coursereg`` logger into one rotating
file. Every record names the learner it concerns, or ``-`` when it is not
about a particular learner, so one learner's attempts can be grepped out of
a busy log.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from coursereg.config import Settings

LOG_FILE = "coursereg.log"
MAX_BYTES = 10 * 1024 * 1024  # 10MB
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | learner=%(learner_id)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NO_LEARNER = "-"


class LearnerFieldFilter(logging.Filter):
    """Give records logged without a learner the placeholder learner_id."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "learner_id"):
            record.learner_id = NO_LEARNER
        return True


def for_learner(logger: logging.Logger, learner_id: str | None) -> logging.LoggerAdapter:
    """Wrap a module logger so its records carry learner_id."""
    return logging.LoggerAdapter(logger, {"learner_id": learner_id or NO_LEARNER})


def setup_logging(
    settings: Settings,
    *,
    console: bool = False,
    level: str | None = None,
) -> logging.Logger:
    """Attach the registrar log handlers to the ``coursereg`` logger.

    Calling this again replaces the handlers from the previous call.

    Args:
        settings: Supplies log_dir and log_level.
        console: Also write to stderr.
        level: Overrides settings.log_level, e.g. "DEBUG" for verbose runs.

    Returns:
        The ``coursereg`` logger.
    """
    level_name = (level or settings.log_level).upper()
    log_path = Path(settings.log_dir) / LOG_FILE
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger("coursereg")
    logger.setLevel(level_name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    ]
    if console:
        handlers.append(logging.StreamHandler())

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    learner_field = LearnerFieldFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(learner_field)
        logger.addHandler(handler)

    logger.info("Registrar log at %s (level=%s)", log_path, level_name)
    return logger
