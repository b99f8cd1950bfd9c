#!/usr/bin/env python3
"""
SatDisplay runner — formats satoshi amounts from the command line.

Usage:
    python run_display.py 1500 -12345678
    python run_display.py --unit BTC 100000000
    python run_display.py --config satdisplay.toml --unit fiat --describe 250000
    python run_display.py --config satdisplay.toml --cycle 2 250000

Environment variables (alternative to the config file):
    SATDISPLAY_FIAT, SATDISPLAY_SHOW_ALL_DECIMALS, SATDISPLAY_LOG_LEVEL
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Ensure the project root is in sys.path so imports work before pip install
# ---------------------------------------------------------------------------
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from satdisplay_core.config import build_fiat_rates, load_config  # noqa: E402
from satdisplay_core.logging_config import setup_logging_from_config  # noqa: E402
from satdisplay_core.units import DisplayUnit, UnitDisplayController  # noqa: E402

logger = logging.getLogger("satdisplay")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Format satoshi amounts for display")
    p.add_argument("amounts", nargs="*", default=["0"],
                   help="Amounts in satoshis")
    p.add_argument("--config", default=None,
                   help="Path to satdisplay.toml config file")
    p.add_argument("--unit", choices=[u.value for u in DisplayUnit], default=None,
                   help="Display unit (default: the controller's current unit)")
    p.add_argument("--cycle", type=int, default=0, metavar="N",
                   help="Cycle the display unit N times before formatting")
    p.add_argument("--describe", action="store_true",
                   help="Print display parts as JSON instead of a string")
    p.add_argument("--log-level", default=None,
                   help="Override the configured log level")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    cfg = load_config(args.config)
    if args.log_level:
        cfg.logging.level = args.log_level.upper()
    setup_logging_from_config(cfg.logging)

    controller = UnitDisplayController(cfg, build_fiat_rates(cfg))
    for _ in range(max(0, args.cycle)):
        controller.cycle_unit()
    logger.debug(f"Display unit: {controller.current_unit.value}")

    status = 0
    for amount in args.amounts:
        try:
            if args.describe:
                print(json.dumps(controller.describe(amount, args.unit).to_dict(),
                                 ensure_ascii=False))
            else:
                print(controller.format(amount, args.unit))
        except ValueError as e:
            print(f"  Error: {e}", file=sys.stderr)
            status = 1
    return status


if __name__ == "__main__":
    raise SystemExit(main())
