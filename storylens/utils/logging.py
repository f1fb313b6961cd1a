"""Loguru sink configuration shared by scripts."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from storylens.utils.config import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
)


def setup_logging(
    config: LoggingConfig | None = None,
    *,
    level: str | None = None,
    log_file: str | Path | None = None,
) -> None:
    """Replace Loguru's default sink with a stderr sink and an optional file sink.

    Explicit ``level``/``log_file`` arguments win over the config section.
    """
    config = config or LoggingConfig()
    level = (level or config.level).upper()
    target = log_file if log_file is not None else config.file

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level)

    if target:
        path = Path(target)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=level,
            rotation=f"{config.max_size_mb} MB",
            retention=config.backup_count,
        )
