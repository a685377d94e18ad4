"""Command-line entry point: schedule on stdout, statistics on stderr."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from .report import compute_stats, format_schedule, format_stats
from .schedule import ScheduleParams, UnsupportedParameters, generate_schedule

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()

logger = logging.getLogger(__name__)


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        raise UsageError(message)


def _count(minimum: int, what: str):
    def parse(raw: str) -> int:
        try:
            value = int(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(f"Failed to parse {what} from [{raw}]") from None
        if value < minimum:
            raise argparse.ArgumentTypeError(f"Failed to parse {what} from [{raw}]")
        return value

    return parse


def parse_seed(raw: str) -> int:
    """``TIME`` means seed from the clock (-1); anything else must be a non-negative int."""
    if raw == "TIME":
        return -1
    try:
        seed = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Failed to parse rng seed from [{raw}]") from None
    if seed < 0:
        raise argparse.ArgumentTypeError(f"rng seed must be a non-negative integer, got {seed}")
    return seed


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="league-schedule",
        description="Generate a round-robin league schedule.",
    )
    parser.add_argument("num_divisions", type=_count(1, "number of divisions"))
    parser.add_argument("num_teams_per_division", type=_count(1, "number of teams per division"))
    parser.add_argument("num_games_vs_division", type=_count(0, "number of games vs division opponents"))
    parser.add_argument(
        "num_games_vs_non_division",
        type=_count(0, "number of games vs non-division opponents"),
    )
    parser.add_argument(
        "--rng",
        type=parse_seed,
        default=-1,
        metavar="{<seed>|TIME}",
        help="shuffle seed (default: TIME)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as exc:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1

    params = ScheduleParams(
        num_divisions=args.num_divisions,
        num_teams_per_division=args.num_teams_per_division,
        num_games_vs_division=args.num_games_vs_division,
        num_games_vs_non_division=args.num_games_vs_non_division,
        seed=args.rng,
    )
    try:
        schedule = generate_schedule(params)
    except UnsupportedParameters as exc:
        print(f"Runtime error: {exc}", file=sys.stderr)
        return 1

    logger.info("Generated %d days with seed %d", schedule.num_days, schedule.seed)
    sys.stdout.write(format_schedule(schedule))
    sys.stderr.write(format_stats(compute_stats(schedule)))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
