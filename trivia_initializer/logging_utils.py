from __future__ import annotations

import logging
import os
from typing import Final

from .constants import BANNER_WIDTH, LOG_LEVEL_ENV

_LOGGER_NAME: Final[str] = "trivia.initializer"


def get_logger() -> logging.Logger:
    """Return the shared logger for diagnostics (stderr, not the status banner)."""

    logger = logging.getLogger(_LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)s %(message)s", "%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(handler)
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def print_rule() -> None:
    print("=" * BANNER_WIDTH)


def print_banner(title: str) -> None:
    print_rule()
    print(title)
    print_rule()


def print_section(header: str, content: str | None = None) -> None:
    print(header)
    if content:
        print(content)
