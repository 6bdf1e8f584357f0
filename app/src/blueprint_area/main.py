#!/usr/bin/env python3
"""
blueprint_area/main.py

Launches the blueprint area tool.  Open a floor plan, set the scale with two
clicks a known distance apart, then either click inside a room to have its
outline detected or drag rectangles over areas; the real-world area is shown
in the side panel.

    blueprint-area [--config settings.json] [--log-level DEBUG] [plan.png]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import config as config_mod
from . import gui_client

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Measure real-world areas on blueprint images.")
    parser.add_argument("image", nargs="?", help="Image or PDF to open on start")
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(asctime)s [%(levelname)s] %(message)s')

    cfg = config_mod.DEFAULT_CONFIG
    if args.config:
        try:
            cfg = config_mod.load_config(args.config)
        except (OSError, ValueError) as e:
            logger.error("Could not read config %s: %s", args.config, e)
            return 1
    try:
        gui_client.main(cfg, args.image)
    except RuntimeError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
