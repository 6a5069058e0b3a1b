"""
log_util.py: Shared logger factory for the Agrar dashboard.

Every module creates its logger with ``logger = app_logger(__name__)``.
Streamlit re-executes the script on each interaction, so handlers are only
attached the first time a logger name is requested.
"""

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LEVEL = "INFO"


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("AGRAR_LOG_LEVEL") or DEFAULT_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def app_logger(
    name: str, log_file: Optional[str] = None, level: Optional[str] = None
) -> logging.Logger:
    """
    Create or fetch a configured logger.

    :param name: Logger name, usually the module ``__name__``.
    :param log_file: Optional path for an additional file handler.
    :param level: Optional level name, overrides ``AGRAR_LOG_LEVEL``.
    :return: logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if getattr(logger, "_agrar_configured", False):
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger._agrar_configured = True
    return logger
