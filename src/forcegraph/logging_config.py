"""
Logging Configuration
Sets up the package logger for the graph viewer.

The level can be given as a number or a name; when omitted, the
FORCEGRAPH_LOG_LEVEL environment variable is consulted before falling back
to INFO.
"""
import logging
import os
import sys
from typing import Optional, Union

LOG_LEVEL_ENV = "FORCEGRAPH_LOG_LEVEL"


def resolve_level(level: Union[int, str, None]) -> int:
    """Turn a level name ('debug', 'INFO') or number into a logging level."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, logging.INFO)
    if isinstance(level, int):
        return level
    if str(level).strip().isdigit():
        return int(level)
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def setup_logging(level: Union[int, str, None] = None, log_file: Optional[str] = None) -> None:
    """
    Configures the logger for the 'forcegraph' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, "info"). Defaults to the
            FORCEGRAPH_LOG_LEVEL environment variable, then INFO.
        log_file: Optional path to save logs to a file.
    """
    level = resolve_level(level)
    logger = logging.getLogger("forcegraph")
    logger.setLevel(level)

    # Avoid duplicate handlers when the host configures logging twice
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    # Format: Time - Module - Level - Message
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.info("Logging initialized at level %s.", logging.getLevelName(level))
