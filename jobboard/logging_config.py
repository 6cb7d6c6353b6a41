"""
Centralized Logging Configuration

Everything goes to stdout through the root logger; modules just call
logging.getLogger(__name__).
"""

import logging
import sys
from typing import Optional

from jobboard.core.config import get_settings


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name for terminal output."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        if levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{self.BOLD}{levelname}{self.RESET}"

        formatted = super().format(record)

        # Other handlers must see the plain level name
        record.levelname = levelname
        return formatted


def setup_logging(log_level: Optional[str] = None) -> None:
    """
    Configure application-wide logging.

    Args:
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    settings = get_settings()
    log_level = log_level or settings.log_level

    if log_level:
        level = getattr(logging, log_level.upper(), logging.INFO)
    elif settings.debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    formatter = ColoredFormatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    for noisy in ("pymongo", "httpx", "httpcore", "passlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    if not settings.sql_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
