"""Gives out a production-ready logger.

This module provides:
- setup_logging: a function to route generator logging to a rotating file handler
"""

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(logger: logging.Logger, debug: bool, log_path: str | None = None):
    """Sets logging of the generator to a .log file and std stream.

    Args:
        logger (Logger): The package logger to configure
        debug (bool): True to log at DEBUG, False to log at INFO
        log_path (str | None): Where to write the log file, ``None`` to skip the file
    """

    log_level = logging.DEBUG if debug else logging.INFO

    handlers = []
    if log_path:
        log_dir = os.path.dirname(log_path)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(log_path, maxBytes=10_000_000, backupCount=5)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]")
        )
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    for handler in logger.handlers:
        handler.close()
    logger.handlers = handlers
    logger.setLevel(log_level)
