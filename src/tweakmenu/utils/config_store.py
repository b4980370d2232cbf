"""JSON-backed store for the flat settings map.

Every mutation is a read-modify-write of the whole file. Missing keys are
filled from a caller-supplied default map, never the other way round, so
settings written by older versions survive upgrades untouched.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from . import json_codec
from .config_utils import RetryPolicy

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[str, str], None]


@dataclass(slots=True)
class ConfigStore:
    """Persist a flat string-keyed settings map to :attr:`path`.

    Parameters
    ----------
    path : Path
        Location of the JSON settings file.
    defaults : Callable[[], dict]
        Factory returning a fresh default map. Used whenever the file has to
        be created or completed.
    retry : RetryPolicy
        Wait policy applied by :meth:`read_and_decode` while the file cannot
        be written.
    on_error : Callable[[str, str], None], optional
        Called with ``(title, message)`` whenever a write fails.
    sleep : Callable[[float], None]
        Sleep function used between retries.
    """

    path: Path
    defaults: Callable[[], Dict[str, Any]] = dict
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    on_error: Optional[ErrorCallback] = None
    sleep: Callable[[float], None] = time.sleep

    def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored map, or ``None`` if it cannot be loaded.

        Corrupt files are reported and treated like missing ones so that the
        next initialization rewrites them.
        """

        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                content = handle.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning(f"Could not read {self.path}: {exc}")
            return None

        try:
            data = json_codec.decode(content)
        except json_codec.DecodeError as exc:
            logger.warning(f"Ignoring corrupt settings file {self.path}: {exc}")
            return None
        # An empty map is written as "[]".
        if data == []:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings file {self.path}: top-level value is not an object")
            return None
        return data

    def write(self, data: Dict[str, Any]) -> bool:
        """Replace the file contents with ``data``.

        Returns ``False`` if the file could not be written. Encoding errors
        are raised before the file is opened.
        """

        text = json_codec.encode(data)
        try:
            with open(self.path, "w", encoding="utf-8") as handle:
                handle.write(text)
        except OSError as exc:
            message = f"Failed to write to {self.path}: {exc}"
            logger.warning(message)
            if self.on_error is not None:
                self.on_error("Settings", message)
            return False
        return True

    def check_and_create(self, defaults: Optional[Dict[str, Any]] = None) -> bool:
        """Create the file from ``defaults`` or add any keys it is missing.

        Existing keys are never removed or overwritten, even when their value
        has a different type than the default.
        """

        if defaults is None:
            defaults = self.defaults()
        config = self.load()
        if config is None:
            logger.warning(f"Config file {self.path} not found! Creating a default config profile...")
            return self.write(defaults)

        for key, value in defaults.items():
            if key not in config:
                config[key] = value
        return self.write(config)

    def read_and_decode(self, defaults: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """Initialise the file, retrying per :attr:`retry`, and return its map.

        Returns ``None`` only when :attr:`RetryPolicy.max_attempts` is
        exhausted.
        """

        attempts = 0
        while not self.check_and_create(defaults):
            attempts += 1
            if self.retry.max_attempts is not None and attempts >= self.retry.max_attempts:
                logger.error(f"Giving up on {self.path} after {attempts} attempts")
                return None
            logger.info(f"Waiting for {self.path} to be created")
            self.sleep(self.retry.interval)
        return self.load()

    def save(self, key: str, value: Any) -> None:
        """Persist ``value`` under ``key``; failures are logged, not raised."""

        data = self.read_and_decode()
        if data is None:
            logger.error(f"Failed to save config to {self.path}")
            return
        data[key] = value
        if not self.write(data):
            logger.error(f"Failed to save config to {self.path}")

    def read(self, key: str) -> Any:
        """Return the stored value for ``key`` or ``None``."""

        data = self.read_and_decode()
        if data is None:
            logger.error(f"Failed to read config from {self.path}")
            return None
        return data.get(key)

    def reset(self, defaults: Optional[Dict[str, Any]] = None) -> None:
        """Overwrite the file with ``defaults``, dropping every other key."""

        if defaults is None:
            defaults = self.defaults()
        if self.write(defaults):
            logger.info(f"Settings in {self.path} reset to defaults")
