"""Analysis and benchmarking tools for deductive solvability."""

import random
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .config import PRESETS
from .field import Field, format_grid, generate
from .solver import DeductiveSolver


def format_solver_state(solver: DeductiveSolver, *, show_coords: bool = True) -> str:
    """
    Format the solver's last-run view of the field as a human-readable string.

    Args:
        solver: Solver instance whose state will be displayed.
        show_coords: If True, include coordinate labels and a header.

    Returns:
        A text grid where unopened cells are '.', inferred mines are 'F' and
        opened cells show their revealed count.
    """
    rows = (
        ["." if v is None else v for v in row] for row in solver.state_grid()
    )
    return format_grid(rows, solver.field.cols, show_coords=show_coords)


def run_solvability_single_test(
    rows: int,
    cols: int,
    density: int,
    *,
    rng: Optional[random.Random] = None,
) -> Dict[str, object]:
    """
    Generate one field and try deduction from every safe start.

    Args:
        rows: Field height.
        cols: Field width.
        density: Mine probability in percent.
        rng: Random source for generation.

    Returns:
        Dict with:
        - mine_count, safe_count
        - solvable: True if some start opens the field (or there are no safe cells)
        - first_start: first successful start in row-major order, or None
        - successful_starts: number of starts that open the field
        - best_opened_fraction: largest opened/safe ratio over all starts
        - avg_passes_count: mean deduction passes per non-mine start
    """
    field = generate(Field(rows, cols), density, rng)
    solver = DeductiveSolver(field)

    first_start = None
    successful_starts = 0
    best_opened = 0
    passes_total = 0

    for idx in range(field.size):
        if field.is_mine[idx]:
            continue
        r, c = divmod(idx, cols)
        opened, success = solver.attempt_solve(r, c)
        passes_total += solver.passes_count
        best_opened = max(best_opened, opened)
        if success:
            successful_starts += 1
            if first_start is None:
                first_start = (r, c)

    safe = field.safe_count
    return {
        "mine_count": field.mine_count,
        "safe_count": safe,
        "solvable": safe == 0 or first_start is not None,
        "first_start": first_start,
        "successful_starts": successful_starts,
        "best_opened_fraction": (best_opened / safe) if safe > 0 else 1.0,
        "avg_passes_count": (passes_total / safe) if safe > 0 else 0.0,
    }


def run_solvability_many_tests(
    rows: int,
    cols: int,
    density: int,
    runs: int,
    *,
    rng: Optional[random.Random] = None,
) -> Dict[str, float]:
    """
    Run many independent single tests and return averaged metrics plus solvable rate.

    Returns:
        Averages of numeric single-test metrics (prefixed with "avg_" unless
        already prefixed), plus "solvable_rate".
    """
    if runs <= 0:
        raise ValueError("runs must be positive.")

    if rng is None:
        rng = random.Random()

    sums: Dict[str, float] = defaultdict(float)
    solvable = 0

    for _ in range(runs):
        result = run_solvability_single_test(rows, cols, density, rng=rng)
        if result["solvable"]:
            solvable += 1
        for k, v in result.items():
            if isinstance(v, (int, float)) and not isinstance(v, bool):
                key = k if k.startswith("avg_") else f"avg_{k}"
                sums[key] += float(v)

    out: Dict[str, float] = {k: total / runs for k, total in sums.items()}
    out["solvable_rate"] = solvable / runs
    return out


def run_density_sweep(
    rows: int,
    cols: int,
    densities: Sequence[int],
    runs: int,
    *,
    rng: Optional[random.Random] = None,
    plot: bool = True,
) -> np.ndarray:
    """
    Measure the solvable rate across mine densities.

    Args:
        rows: Field height.
        cols: Field width.
        densities: Densities (percent) to test.
        runs: Fields generated per density.
        rng: Random source shared across the sweep.
        plot: If True, show a line chart of solvable rate against density.

    Returns:
        Array of solvable rates aligned with `densities`.
    """
    if rng is None:
        rng = random.Random()

    rates = np.array(
        [
            run_solvability_many_tests(rows, cols, d, runs, rng=rng)["solvable_rate"]
            for d in densities
        ],
        dtype=np.float64,
    )

    if plot:
        plt.figure()  # type: ignore[misc]
        plt.plot(np.asarray(densities), rates, marker="o")  # type: ignore[misc]
        plt.xlabel("Mine density (%)")  # type: ignore[misc]
        plt.ylabel("Solvable rate")  # type: ignore[misc]
        plt.ylim(0.0, 1.0)  # type: ignore[misc]
        plt.title(f"Deductive solvability on {rows}x{cols} fields")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

    return rates


def run_preset_analysis(
    runs: int,
    *,
    rng: Optional[random.Random] = None,
    plot: bool = True,
) -> Dict[str, Dict[str, float]]:
    """
    Run many tests on every named preset and optionally plot the solvable rates.

    Returns:
        Mapping from preset name to statistics from run_solvability_many_tests().
    """
    if rng is None:
        rng = random.Random()

    results: Dict[str, Dict[str, float]] = {}
    for name, (r, c, d) in PRESETS.items():
        results[name] = run_solvability_many_tests(r, c, d, runs, rng=rng)

    if plot:
        names: List[str] = list(results)
        x = np.arange(len(names))

        plt.figure()  # type: ignore[misc]
        plt.bar(x, [results[n]["solvable_rate"] for n in names])  # type: ignore[misc]
        plt.xticks(x, names)  # type: ignore[misc]
        plt.ylabel("Solvable rate")  # type: ignore[misc]
        plt.ylim(0.0, 1.0)  # type: ignore[misc]
        plt.title("Solvable rate by preset")  # type: ignore[misc]
        plt.tight_layout()
        plt.show()  # type: ignore[misc]

    return results
