"""
Logging helpers for hosts embedding the engine.

The engine modules only create named loggers; attaching handlers is left
to the host application through the functions below.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .config import LOG_DATE_FORMAT, LOG_FORMAT, LOG_FORMAT_DETAILED, Config, get_config


def setup_logger(
    name: str = "checkers",
    log_file: Optional[str] = None,
    level: int = logging.INFO
) -> logging.Logger:
    """Attach a stdout handler, plus a file handler when ``log_file`` is set.

    A logger that already has handlers is returned as is.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(console_handler)

    # The file gets the logger name as well
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT_DETAILED, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(file_handler)

    return logger


def parse_level(level: Union[str, int]) -> int:
    """Translate a level name such as ``"debug"`` into a logging constant."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown logging level: {level!r}")
    return value


def configure_logging(config: Optional[Config] = None) -> logging.Logger:
    """Apply the ``logging`` section of a config to the package logger."""
    if config is None:
        config = get_config()
    settings = config.logging
    return setup_logger(
        "checkers",
        log_file=settings.log_file or None,
        level=parse_level(settings.level),
    )
