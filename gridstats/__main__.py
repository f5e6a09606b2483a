"""Print a meter's consumption, CO2 and average grid fuel mix.

Usage:
  GRIDSTATS_API_KEY=... python -m gridstats --start 2023-01-01 --end 2023-01-31T23:59:59Z
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import Optional, Sequence

from . import formats
from .config import StatsConfig
from .exceptions import GridStatsError
from .summary import compute_aggregate

LOGGER = logging.getLogger("gridstats.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridstats",
        description="Building consumption and GB grid carbon stats for one meter.",
    )
    parser.add_argument("--meter-id", help="Openvolt meter id")
    parser.add_argument("--start", help="Window start, ISO-8601 (UTC if no offset)")
    parser.add_argument("--end", help="Window end, ISO-8601 (UTC if no offset)")
    parser.add_argument(
        "--format",
        choices=("text", "html", "json"),
        default="text",
        help="Output rendering (default: text)",
    )
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> StatsConfig:
    config = StatsConfig.from_env()
    if args.meter_id:
        config = replace(config, meter_id=args.meter_id)
    if args.timeout is not None:
        config = replace(config, timeout=args.timeout)
    if args.start or args.end:
        config = config.with_window(args.start or config.start, args.end or config.end)
    return config


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")

    try:
        config = config_from_args(args)
        stats = asyncio.run(compute_aggregate(config))
    except GridStatsError as exc:
        LOGGER.error("%s: %s", type(exc).__name__, exc)
        return 1

    if args.format == "json":
        sys.stdout.write(json.dumps(formats.to_payload(stats), indent=2) + "\n")
    elif args.format == "html":
        sys.stdout.write(formats.render_html(stats))
    else:
        sys.stdout.write(formats.render_text(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())
