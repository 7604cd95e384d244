"""
Logging Configuration Module
This module provides centralized logging functionality for the Skin-In service.
"""

import logging
import os
from datetime import datetime
from functools import wraps
from pathlib import Path


# Log files go to $SKIN_IN_LOGS_DIR, or ./logs relative to the working directory
LOGS_DIR = Path(os.environ.get("SKIN_IN_LOGS_DIR", "logs"))

# One log file per process, named after the start time
LOG_FILE = f"{datetime.now().strftime('%Y_%m_%d_%H_%M_%S')}.log"
LOG_FILE_PATH = LOGS_DIR / LOG_FILE


def get_logger(name: str = __name__) -> logging.Logger:
    """
    Get a configured logger instance

    Args:
        name: Name of the logger (usually __name__ from calling module)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        detailed_formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s [%(name)s.%(funcName)s:%(lineno)d] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        simple_formatter = logging.Formatter(
            "%(levelname)s - %(message)s"
        )

        # File handler with detailed formatting
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_FILE_PATH, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)

        # Console handler with simple formatting
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(simple_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        # Prevent propagation to root logger
        logger.propagate = False

    return logger


def set_console_level(level: str) -> None:
    """
    Change the console verbosity of every logger created by get_logger.

    Args:
        level: Logging level name, e.g. "INFO" or "WARNING"
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    for logger_obj in logging.Logger.manager.loggerDict.values():
        if not isinstance(logger_obj, logging.Logger):
            continue
        for handler in logger_obj.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(numeric_level)


def log_function_call(func):
    """
    Decorator to log function calls with arguments and return values

    Args:
        func: Function to decorate

    Returns:
        Wrapped function with logging
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        func_logger = get_logger(func.__module__)
        func_logger.debug(f"Calling {func.__name__} with kwargs={list(kwargs.keys())}")

        try:
            result = func(*args, **kwargs)
            func_logger.debug(f"{func.__name__} completed successfully")
            return result
        except Exception as e:
            func_logger.error(f"{func.__name__} failed with error: {str(e)}")
            raise

    return wrapper
