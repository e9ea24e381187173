"""
Logging configuration using loguru.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(level: str = "warning", log_file: Optional[str] = None) -> logger:
    """
    Setup application logging.

    Called once from the environment and again after options are parsed,
    so every call starts from a clean set of handlers.

    Args:
        level: Minimum level for stderr (debug, info, warning, error)
        log_file: Optional file that receives everything from DEBUG up

    Returns:
        Configured logger instance
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level.upper(),
        format=CONSOLE_FORMAT,
    )

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            path,
            rotation="10 MB",
            retention="30 days",
            level="DEBUG",
            format=FILE_FORMAT,
        )
        logger.debug(f"Log file: {path}")

    return logger
