# src/cli/find_path.py

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from env.loader import load_grid_config
from monitoring.bus import EventBus
from monitoring.dashboard_tui import SearchDashboard
from monitoring.logger import JsonFileLogger
from nav_core import initialize
from nav_core.errors import GridConfigError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run one A* search on a configured grid and print the result as JSON."
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to grid.yaml")
    parser.add_argument("--profile", default=None, help="Grid profile name (from grid.yaml)")
    parser.add_argument(
        "--start", nargs=2, type=float, required=True, metavar=("X", "Y"),
        help="Start world position",
    )
    parser.add_argument(
        "--target", nargs=2, type=float, required=True, metavar=("X", "Y"),
        help="Target world position",
    )
    parser.add_argument(
        "--block", nargs=2, type=int, action="append", default=[], metavar=("COL", "ROW"),
        help="Mark an extra cell unwalkable (repeatable)",
    )
    parser.add_argument(
        "--no-diagonal", action="store_true",
        help="Disable diagonal movement regardless of the profile",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Append monitoring events as JSONL")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")
    parser.add_argument(
        "--summary", action="store_true",
        help="Print a dashboard snapshot to stderr after the search",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_grid_config(profile=args.profile, path=args.config)
    except (FileNotFoundError, GridConfigError) as exc:
        print(f"Grid config FAILED: {exc}", file=sys.stderr)
        return 2

    if args.no_diagonal:
        config.diagonal_movement = False
    config.blocked = list(config.blocked) + [tuple(cell) for cell in args.block]

    bus = EventBus()
    file_logger = JsonFileLogger(args.log_file, bus) if args.log_file else None
    dashboard = SearchDashboard(bus, Console(stderr=True)) if args.summary else None

    try:
        engine, _grid = initialize(config, bus=bus)
        result = engine.find_path(tuple(args.start), tuple(args.target))
    except GridConfigError as exc:
        print(f"Grid config FAILED: {exc}", file=sys.stderr)
        return 2
    finally:
        if file_logger is not None:
            file_logger.close()

    print(json.dumps(
        {
            "profile": config.name,
            "result": result.to_dict(),
        },
        indent=2,
        sort_keys=True,
    ))

    if dashboard is not None:
        dashboard.print_snapshot()
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
