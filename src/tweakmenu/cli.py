#!/usr/bin/env python3

"""Command line interface for inspecting and editing the menu settings.

Every command first makes sure the settings file exists and contains all
default keys, exactly as the menu does on start-up.
"""

from __future__ import annotations

import argparse
import logging
from typing import Any, List, Optional

from .features import default_config
from .utils import config_utils, json_codec, logging_config
from .utils.config_store import ConfigStore

logger = logging.getLogger(__name__)


def parse_value(raw: str) -> Any:
    """Interpret ``raw`` as JSON, falling back to the plain string."""

    try:
        return json_codec.decode(raw)
    except json_codec.DecodeError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect and edit Tweak Menu settings.",
        epilog="The settings file defaults to $TWEAKMENU_CONFIG or ./tweakmenu.json.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="Path to the settings file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("show", help="Print all settings as JSON")
    get_parser = commands.add_parser("get", help="Print one setting as JSON")
    get_parser.add_argument("key")
    set_parser = commands.add_parser("set", help="Store a setting")
    set_parser.add_argument("key")
    set_parser.add_argument("value", help="JSON value; anything else is stored as a string")
    commands.add_parser("reset", help="Restore all settings to their defaults")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the settings CLI."""

    args = build_parser().parse_args(argv)
    logging_config.configure(args.log_level)

    store = ConfigStore(
        config_utils.config_path(args.config),
        defaults=default_config,
        retry=config_utils.retry_policy_from_env(),
    )

    if args.command == "reset":
        store.reset()
        return 0

    data = store.read_and_decode()
    if data is None:
        logger.error(f"Could not initialise {store.path}")
        return 1

    if args.command == "show":
        print(json_codec.encode(data))
    elif args.command == "get":
        if args.key not in data:
            logger.error(f"Unknown setting: {args.key}")
            return 1
        print(json_codec.encode(data[args.key]))
    elif args.command == "set":
        value = parse_value(args.value)
        store.save(args.key, value)
        logger.info(f"Saved {args.key} = {json_codec.encode(value)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
