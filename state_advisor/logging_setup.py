from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import LOG_DIR, LOG_FILE_NAME, LOG_FILE_RETENTION, LOG_FILE_ROTATION, LOG_LEVEL


def configure_logging(
    level: Optional[str] = None,
    log_file: bool = True,
    log_dir: Path = LOG_DIR,
) -> None:
    """
    Replace loguru's default sink with a stderr sink at ``level`` and,
    optionally, a rotating file sink under ``log_dir``.
    """
    level = (level or LOG_LEVEL).upper()
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / LOG_FILE_NAME,
            level=level,
            rotation=LOG_FILE_ROTATION,
            retention=LOG_FILE_RETENTION,
            encoding="utf-8",
        )
    logger.debug("Logging configured at {}", level)
