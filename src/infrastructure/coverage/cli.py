"""Command-line entry point for transmitter power planning.

Usage:
    radio-towers [input] [--tie-break {lowest-id,first-seen}] [--log-level LEVEL]

Reads the instance (default: input.txt), solves it and prints the result
to stdout. Logs go to stderr so stdout carries only the result.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from domain.coverage.errors import CoverageError
from domain.coverage.repositories import ProblemRepository
from domain.coverage.services import TieBreak, solve
from domain.coverage.value_objects import Solution

from .report import format_solution
from .text_adapter import TextInstanceAdapter

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "input.txt"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radio-towers",
        description=(
            "Compute the transmitter power increases needed so that every "
            "receiving tower on the island gets a signal."
        ),
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"instance file (default: {DEFAULT_INPUT})",
    )
    parser.add_argument(
        "--tie-break",
        choices=[t.value for t in TieBreak],
        default=TieBreak.LOWEST_ID.value,
        help="which transmitter wins when several cover equally many receivers",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="logging verbosity on stderr (default: WARNING)",
    )
    return parser


def plan(
    repository: ProblemRepository,
    source: str,
    tie_break: TieBreak = TieBreak.LOWEST_ID,
) -> Solution:
    """Load an instance through the repository port and solve it."""
    instance = repository.load_instance(source)
    return solve(instance, tie_break=tie_break)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the planner.

    Returns:
        0 on success, 1 on failure
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT)

    try:
        solution = plan(
            TextInstanceAdapter(), args.input, tie_break=TieBreak(args.tie_break)
        )
    except FileNotFoundError as e:
        print(f"Program failed: input file not found: {e}")
        return 1
    except (CoverageError, OSError) as e:
        logger.debug("Solve aborted", exc_info=True)
        print(f"Program failed: {e}")
        return 1

    for line in format_solution(solution):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
