# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0

"""
Logging setup for htop-tools.

Every module logs through a child of the ``htop_tools`` logger. Console
output goes to stderr so stdout stays reserved for operation results.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "htop_tools"

CONSOLE_FORMAT = "[%(asctime)s] [%(name)s:%(levelname)s] %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(name)s | %(levelname)s | %(filename)s:%(lineno)d | %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(level: str) -> int:
    """Convert string level to logging constant"""
    return _LEVELS.get(level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Configure the htop_tools logger hierarchy.

    Safe to call more than once: handlers are only attached the first time,
    later calls just adjust the level.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Rotating log file (10MB, 5 backups); disabled when None
        console_output: Attach a stderr handler

    Returns:
        The configured root logger for the package
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(parse_level(level))

    if getattr(logger, "_htop_tools_configured", False):
        return logger

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(
            logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT)
        )
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(
            logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT)
        )
        file_handler.setLevel(logging.DEBUG)  # File gets everything
        logger.addHandler(file_handler)

    logger.propagate = False
    logger._htop_tools_configured = True  # type: ignore[attr-defined]
    return logger


def get_logger(component: str) -> logging.Logger:
    """Get a child logger, e.g. get_logger("shell") -> htop_tools.shell"""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
