import logging
from typing import Optional, Union

import config

# Single handler shared by every configure_logging() call
_handler = logging.StreamHandler()
_handler.setFormatter(logging.Formatter(config.LOG_FORMAT))


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger(config.LOGGER_NAME)
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)
    logger.setLevel(level)

    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return logger
