"""Centralised logging configuration for Tweak Menu.

This module applies :func:`logging.basicConfig` with a default format and
level. The log level can be overridden via the ``LOG_LEVEL`` environment
variable or by passing an explicit level to :func:`configure`. Setting
``LOG_FILE_PATH`` additionally writes records to a rotating log file.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import List, Optional, Union

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
MAX_LOG_BYTES = 2_000_000


def configure(level: Union[str, int, None] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level:
        Logging level to apply. If ``None``, the ``LOG_LEVEL`` environment
        variable is consulted and defaults to ``INFO`` if unset.
    log_file:
        Optional path of a rotating log file. If ``None``, ``LOG_FILE_PATH``
        is consulted; when neither is set only stderr is used.
    """

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if log_file is None:
        log_file = os.getenv("LOG_FILE_PATH")

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=MAX_LOG_BYTES, backupCount=2, encoding="utf-8")
        )
    logging.basicConfig(level=level, format=DEFAULT_FORMAT, handlers=handlers, force=True)
