"""Logging helpers.

`get_logger` hands out named loggers sharing one stream handler, so every
layer around the engine logs with the same format.
"""

import logging

from healthcore.config import settings

_formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)


def get_logger(name: str = __name__, level: int | str | None = None) -> logging.Logger:
    """Return a configured logger, adding the shared handler only once."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(level or settings.log_level.upper())
        logger.addHandler(_stream_handler)
    return logger
