"""Logging setup for reading_list.

Warnings and errors go to stderr; everything at the configured level goes to
a rotating log file in the data directory.
"""

import logging
import logging.handlers
import sys

from reading_list.config import AppConfig


LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

logger = logging.getLogger("reading_list")


def setup_logging(config: AppConfig) -> logging.Logger:
    """Configure the ``reading_list`` logger from ``config``.

    Calling it again replaces the handlers installed by the previous call.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(config.log_level)
    logger.propagate = False

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.WARNING)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console)

    log_path = config.log_path
    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        except OSError as e:
            logger.warning(f"Cannot write log file {log_path}: {e}")
        else:
            file_handler.setLevel(config.log_level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            logger.addHandler(file_handler)

    return logger
