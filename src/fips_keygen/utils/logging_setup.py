import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOGGER_NAME = "fips_keygen"


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, max_size_mb: int = 5) -> logging.Logger:
    """
    Configures the package logger for the command line scripts.

    Args:
        level (str): Level name, e.g. "INFO" or "DEBUG".
        log_file (str, optional): Also write JSON lines to this rotating file.
        max_size_mb (int): Size at which the log file is rotated.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s [%(levelname)s] %(message)s'
    ))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1_000_000,
            backupCount=5
        )
        file_handler.setFormatter(logging.Formatter(
            '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
        ))
        logger.addHandler(file_handler)

    return logger
