"""
Log output for the ``seagsw`` package.

Library modules only emit records through ``logging.getLogger(__name__)``.
Applications that want to see them call :func:`setup_logging` once at
start-up; calling it again replaces the previous handlers.
"""

import logging
import os
import sys
from typing import List, Optional, Union

PACKAGE_LOGGER = "seagsw"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _detach_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[Union[str, os.PathLike]] = None,
) -> logging.Logger:
    """
    Send ``seagsw`` log records to standard output and optionally a file.

    Parameters
    ----------
    level : int, default ``logging.INFO``
        Threshold for the package logger and its handlers.
    log_file : str or path-like, optional
        File to write records to.  It is truncated on each call.

    Returns
    -------
    logging.Logger
        The package logger.

    Examples
    --------
    >>> import logging
    >>> setup_logging(logging.WARNING).name
    'seagsw'
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    _detach_handlers(logger)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging to %d handler(s) at level %s", len(handlers), logging.getLevelName(level))
    return logger
