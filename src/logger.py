#!src/logger.py
"""
Logger module for the kit dispensing dashboard.

This module provides a standardized logging mechanism for the application.
"""

import os
import logging
from datetime import datetime
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_logger(
    name: str,
    level: int = logging.INFO,
    log_dir: str = "logs",
    console: bool = False,
) -> logging.Logger:
    """
    Create a logger writing to a timestamped file, optionally echoing to the console.

    Args:
        name (str): Name of the logger.
        level (int, optional): Logging level. Defaults to logging.INFO.
        log_dir (str, optional): Directory to store log files. Defaults to "logs".
        console (bool, optional): Also log to stderr. Defaults to False.

    Returns:
        logging.Logger: Configured logger instance.
    """
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)

    # Clear any existing handlers to prevent duplicate logging
    logger.handlers.clear()
    logger.setLevel(level)

    formatter = logging.Formatter(LOG_FORMAT)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_filename = os.path.join(log_dir, f"{name}_{timestamp}.log")
    file_handler = logging.FileHandler(log_filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    logger.propagate = False

    return logger


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Retrieve an existing logger or create a new one.

    Args:
        name (str): Name of the logger.
        level (Optional[int], optional): Logging level. Defaults to None.

    Returns:
        logging.Logger: Logger instance.
    """
    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    return logger


def resolve_level(level_name: Optional[str], default: int = logging.INFO) -> int:
    """
    Map a level name from configuration (e.g. "debug") to a logging level.

    Unknown or empty names fall back to ``default``.
    """
    if not level_name:
        return default
    numeric_level = getattr(logging, str(level_name).upper(), None)
    return numeric_level if isinstance(numeric_level, int) else default
