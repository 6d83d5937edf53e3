"""Allocate frequencies to cell towers read from a CSV file.

Towers closer than the interference radius must not share a frequency. The
allocation runs a degree-ordered greedy coloring of the interference graph and
prints the processing order, the allocation log and the final plan.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from towerfreq.allocator import run_allocation
from towerfreq.config import DEFAULT_INTERFERENCE_RADIUS_KM, DEFAULT_PALETTE, AllocationConfig
from towerfreq.loader import load_towers_csv
from towerfreq.metrics import find_conflicts, summarize
from towerfreq.report import format_header, format_report

DEFAULT_TOWER_FILE = Path("towers.csv")

logger = logging.getLogger("towerfreq")


def parse_palette(text: str) -> List[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid palette: {text}") from exc


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Cell tower frequency allocator")
    parser.add_argument(
        "path",
        type=Path,
        nargs="?",
        default=None,
        help=f"Tower CSV file (defaults to {DEFAULT_TOWER_FILE})",
    )
    parser.add_argument(
        "--radius-km",
        type=float,
        default=DEFAULT_INTERFERENCE_RADIUS_KM,
        help="Towers strictly closer than this interfere",
    )
    parser.add_argument(
        "--palette",
        type=parse_palette,
        default=list(DEFAULT_PALETTE),
        help="Comma-separated channels in order of preference",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print graph and channel usage statistics after the plan",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level DEBUG")
    return parser.parse_args(argv)


def resolve_path(path: Path | None) -> Path:
    if path is None:
        path = DEFAULT_TOWER_FILE
    elif not path.exists() and DEFAULT_TOWER_FILE.exists():
        print(f"Warning: File '{path}' not found.", file=sys.stderr)
        print(f"Falling back to default '{DEFAULT_TOWER_FILE}'.", file=sys.stderr)
        path = DEFAULT_TOWER_FILE
    if not path.exists():
        raise FileNotFoundError(
            f"File not found at '{path}'. Please ensure '{DEFAULT_TOWER_FILE}' is in "
            "the current directory or provide a valid path."
        )
    return path


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("--- Cell Tower Frequency Allocator ---")
    try:
        config = AllocationConfig(interference_radius_km=args.radius_km, palette=args.palette)
        path = resolve_path(args.path)
        print(f"Loading towers from: {path}")
        print(format_header(config) + "\n")

        towers = load_towers_csv(path)
        if not towers:
            raise ValueError(
                "No towers were loaded. The file might be empty or all lines were corrupt."
            )
        print(f"Successfully loaded {len(towers)} towers.\n")

        result = run_allocation(towers, config)
    except (OSError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    print(format_report(result))

    conflicts = find_conflicts(result)
    if conflicts:
        logger.error("allocation produced %d co-channel conflicts", len(conflicts))
    if args.summary:
        summary = summarize(result)
        print(
            f"Towers: {summary.num_towers}, Edges: {summary.num_edges}, "
            f"Components: {summary.num_components}, MaxDegree: {summary.max_degree}"
        )
        print(
            f"Assigned: {summary.num_assigned}, Unassignable: {summary.num_unassignable}, "
            f"ChannelsUsed: {summary.channels_used}/{len(config.palette)}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
