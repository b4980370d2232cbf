"""Locate the settings file and read runtime options from the environment.

The settings path is resolved with the following precedence:

1. An explicit path passed by the caller (e.g. ``--config`` on the CLI)
2. The ``TWEAKMENU_CONFIG`` environment variable
3. ``tweakmenu.json`` in the current working directory
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tweakmenu.json"


@dataclass(frozen=True)
class RetryPolicy:
    """How long to keep retrying settings initialization.

    ``max_attempts`` of ``None`` retries until the file becomes writable.
    """

    interval: float = 1.0
    max_attempts: Optional[int] = None


def config_path(override: str | Path | None = None) -> Path:
    """Return the path of the settings file."""

    if override:
        return Path(override).expanduser()
    env_path = os.getenv("TWEAKMENU_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return Path.cwd() / CONFIG_FILENAME


def retry_policy_from_env() -> RetryPolicy:
    """Build a :class:`RetryPolicy` from ``TWEAKMENU_RETRY_*`` variables.

    Invalid values are logged and replaced by the defaults.
    """

    interval = RetryPolicy.interval
    raw_interval = os.getenv("TWEAKMENU_RETRY_INTERVAL")
    if raw_interval:
        try:
            interval = max(0.0, float(raw_interval))
        except ValueError:
            logger.warning(f"Invalid TWEAKMENU_RETRY_INTERVAL '{raw_interval}'; using {interval}")

    max_attempts = None
    raw_max = os.getenv("TWEAKMENU_RETRY_MAX")
    if raw_max:
        try:
            max_attempts = int(raw_max)
        except ValueError:
            logger.warning(f"Invalid TWEAKMENU_RETRY_MAX '{raw_max}'; retrying without limit")
        else:
            if max_attempts <= 0:
                max_attempts = None

    return RetryPolicy(interval=interval, max_attempts=max_attempts)
