"""
Quickstart example for the Minefield Generator.

This script demonstrates basic usage of the generator and the deductive solver.
"""

import random

from minefield import (
    DeductiveSolver,
    Field,
    format_field,
    format_solver_state,
    generate_solvable,
    run_solvability_many_tests,
    validate,
)


def main():
    print("=" * 60)
    print("Minefield Generator - Quickstart Example")
    print("=" * 60)

    rng = random.Random(2024)

    # Example 1: Generate a solvable field
    print("\n1. Generating a solvable 8x8 field at 15% density...")
    print("-" * 60)

    field = Field(8, 8)
    report = generate_solvable(field, density=15, max_attempts=100, rng=rng)

    print(f"Solvable: {report.solvable} (attempts: {report.attempts})")
    print(f"Start cell: {report.start}")
    print(f"Mines: {field.mine_count}")
    print(f"Count mismatches: {len(validate(field))}")
    print(format_field(field))

    # Example 2: Solver state from the witness start
    if report.start is not None:
        print("\n2. Solver state from the witness start:")
        print("-" * 60)
        solver = DeductiveSolver(field)
        opened, success = solver.attempt_solve(*report.start)
        print(f"Opened {opened}/{field.safe_count} safe cells, success={success}")
        print(format_solver_state(solver))

    # Example 3: Solvable rate by density
    print("\n3. Solvable rate by density (20 fields each)...")
    print("-" * 60)

    for density in (10, 15, 20, 25):
        results = run_solvability_many_tests(8, 8, density, runs=20, rng=rng)
        print(f"{density:3d}%: {results['solvable_rate']*100:5.1f}% solvable")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)


if __name__ == "__main__":
    main()
