"""Command line entry point: generate a deductively solvable field and optionally save it."""

import argparse
import logging
import random
import sys
from typing import List, Optional

from .config import DEFAULT_COLS, DEFAULT_DENSITY, DEFAULT_MAX_ATTEMPTS, DEFAULT_ROWS
from .field import Field, InvalidDimensions, format_field, validate
from .persistence import save_field
from .search import generate_solvable

logger = logging.getLogger("minefield")

EXIT_OK = 0
EXIT_UNSOLVABLE = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minefield",
        description="Generate a minefield that opens completely by local deduction.",
    )
    parser.add_argument("--rows", type=int, default=DEFAULT_ROWS)
    parser.add_argument("--cols", type=int, default=DEFAULT_COLS)
    parser.add_argument(
        "--density",
        type=int,
        default=DEFAULT_DENSITY,
        help="Mine probability per cell in percent (clamped to 0..100).",
    )
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", default=None, help="Save the field to this file.")
    parser.add_argument("--show", action="store_true", help="Print the field.")
    parser.add_argument("--color", action="store_true", help="Use ANSI colors.")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        field = Field(args.rows, args.cols)
    except InvalidDimensions as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if args.max_attempts < 1:
        logger.error("--max-attempts must be at least 1.")
        return EXIT_ERROR

    rng = random.Random(args.seed)
    report = generate_solvable(field, args.density, args.max_attempts, rng)

    if args.show:
        print(format_field(field, show_mines=True, color=args.color))

    if not report.solvable:
        print(
            f"No deductively solvable field found after {report.attempts} attempts."
        )
        return EXIT_UNSOLVABLE

    if report.start is None:
        print(f"Field {field.rows}x{field.cols} has no safe cells.")
    else:
        print(
            f"Field {field.rows}x{field.cols} with {field.mine_count} mines is "
            f"solvable from {report.start} (attempt {report.attempts})."
        )

    mismatches = validate(field)
    if mismatches:
        for m in mismatches:
            logger.error(
                "Cell (%d, %d) has count=%d, expected %d",
                m.row,
                m.col,
                m.stored,
                m.actual,
            )
        return EXIT_ERROR

    if args.output:
        try:
            path = save_field(field, args.output)
        except OSError as e:
            logger.error("Cannot save to %s: %s", args.output, e)
            return EXIT_ERROR
        print(f"Saved to {path}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
