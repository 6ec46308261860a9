"""
Logging configuration using loguru.

The engines log through loguru directly. The CLI calls setup_logging() once
with the validated ``logging`` section of the config to decide where that
output goes.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from finproj.core.config_schema import LoggingConfig

CONSOLE_FORMAT = "<level>[{level.name}]</level> {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function} | {message}"


def setup_logging(settings: LoggingConfig, level: str | None = None) -> None:
    """
    Point loguru at stderr and, when ``settings.file`` is set, a rotating file.

    Args:
        settings: Validated logging section (level, file, rotation, retention).
        level: Overrides ``settings.level``, e.g. from ``--log-level``.
    """
    level = (level or settings.level).upper()
    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if settings.file:
        logger.add(
            settings.file,
            level=level,
            format=FILE_FORMAT,
            rotation=settings.rotation,
            retention=settings.retention,
        )
        logger.debug(f"Logging to {settings.file} at {level}")
