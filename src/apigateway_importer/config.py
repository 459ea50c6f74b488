"""Session configuration and logging setup."""

import itertools
import logging
from typing import Literal

from pydantic import BaseModel, Field

LOGGER_NAME = "apigateway_importer"

LogLevel = Literal["silent", "debug", "info", "warning", "error"]

_LEVELS = {
    "silent": logging.CRITICAL + 1,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_sessions = itertools.count(1)


class ImporterOptions(BaseModel):
    """Options supplied once per import session."""

    region: str | None = None
    profile: str | None = None
    log_level: LogLevel = "info"
    delay: float = Field(default=0.3, gt=0)  # retry base delay, seconds


def session_logger(level: LogLevel) -> logging.Logger:
    """Child logger owned by one importer session, with its own level.

    Records still propagate to the package logger's handlers.
    """
    logger = logging.getLogger(f"{LOGGER_NAME}.session{next(_sessions)}")
    logger.setLevel(_LEVELS[level])
    return logger


def configure_logging(level: LogLevel = "info") -> logging.Logger:
    """Set the package logger's verbosity and attach a stream handler once. Used by the CLI."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_LEVELS[level])

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)

    return logger
