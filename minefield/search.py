"""Search for a start cell from which a field opens completely without guessing."""

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from .config import DEFAULT_MAX_ATTEMPTS
from .field import Field, generate
from .solver import DeductiveSolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchReport:
    """
    Outcome of `generate_solvable`.

    `solvable` is False only when every attempt was exhausted. `start` is the
    witness cell, or None when the field has no safe cells (vacuously solvable)
    or no attempt succeeded.
    """

    solvable: bool
    start: Optional[Tuple[int, int]]
    attempts: int


def find_solvable_start(field: Field) -> Optional[Tuple[int, int]]:
    """
    Return the first safe cell, in row-major order, from which deduction opens the field.

    Returns:
        (row, col) of the first successful start, or None if no start succeeds.
    """
    solver = DeductiveSolver(field)
    for idx in range(field.size):
        if field.is_mine[idx]:
            continue
        r, c = divmod(idx, field.cols)
        _, success = solver.attempt_solve(r, c)
        if success:
            logger.debug("Field %r solvable from (%d, %d)", field, r, c)
            return r, c

    logger.debug("Field %r is not solvable by local deduction", field)
    return None


def check_solvability(field: Field) -> bool:
    """True if some start opens every safe cell, or there are no safe cells at all."""
    if field.safe_count == 0:
        return True
    return find_solvable_start(field) is not None


def generate_solvable(
    field: Field,
    density: int,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rng: Optional[random.Random] = None,
) -> SearchReport:
    """
    Regenerate `field` at `density` until it is solvable or attempts run out.

    Args:
        field: Field to regenerate in place; holds the last generated layout on return.
        density: Mine probability in percent; clamped to [0, 100].
        max_attempts: Maximum number of generations, must be >= 1.
        rng: Random source shared across attempts. A fresh unseeded
            `random.Random` when omitted.

    Returns:
        A SearchReport; solvable=False means every attempt failed.

    Raises:
        ValueError: If max_attempts < 1.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")

    if rng is None:
        rng = random.Random()

    for attempt in range(1, max_attempts + 1):
        generate(field, density, rng)

        if field.safe_count == 0:
            logger.info(
                "Attempt %d: field has no safe cells, vacuously solvable", attempt
            )
            return SearchReport(True, None, attempt)

        start = find_solvable_start(field)
        if start is not None:
            logger.info(
                "Attempt %d: solvable %dx%d field with %d mines, start %s",
                attempt,
                field.rows,
                field.cols,
                field.mine_count,
                start,
            )
            return SearchReport(True, start, attempt)

    logger.warning(
        "No solvable %dx%d field at %s%% after %d attempts",
        field.rows,
        field.cols,
        density,
        max_attempts,
    )
    return SearchReport(False, None, max_attempts)
