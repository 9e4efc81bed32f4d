# infrastructure/logging/log_setup.py
from __future__ import annotations

import sys
from typing import Optional, TextIO

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <7}</level> | {message}"


def setup_console_logging(level: str = "INFO", sink: Optional[TextIO] = None) -> None:
    logger.remove()
    logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)
