"""
Logging setup shared by scripts and service entry points
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from app.core.config import settings


def configure_logging(
    level: Optional[str] = None, log_file: Optional[str] = None
) -> None:
    """Configure root logging: console always, rotating file when a path is set."""
    log_handlers: List[logging.Handler] = [logging.StreamHandler()]

    log_file = log_file if log_file is not None else settings.log_file
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        log_handlers.append(
            RotatingFileHandler(
                log_file, maxBytes=5 * 1024 * 1024, backupCount=2, encoding="utf-8"
            )
        )

    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format=settings.log_format,
        datefmt=settings.log_date_format,
        handlers=log_handlers,
        force=True,
    )

    # Quiet noisy HTTP client loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
