import random

import numpy as np
import pytest

from minefield import (
    DeductiveSolver,
    format_solver_state,
    run_density_sweep,
    run_solvability_many_tests,
    run_solvability_single_test,
)


def test_format_solver_state(chain_field):
    solver = DeductiveSolver(chain_field)
    solver.attempt_solve(0, 0)

    assert format_solver_state(solver, show_coords=False).splitlines() == [
        " 1  .  .  .",
        " .  .  .  .",
        " .  .  .  .",
    ]

    solver.attempt_solve(2, 3)
    assert format_solver_state(solver, show_coords=False).splitlines()[0] == " 1  F  1  0"


def test_single_test_on_empty_field():
    result = run_solvability_single_test(3, 3, 0, rng=random.Random(0))

    assert result["mine_count"] == 0
    assert result["solvable"] is True
    assert result["first_start"] == (0, 0)
    assert result["successful_starts"] == 9
    assert result["best_opened_fraction"] == 1.0


def test_single_test_on_full_field():
    result = run_solvability_single_test(2, 3, 100, rng=random.Random(0))

    assert result["safe_count"] == 0
    assert result["solvable"] is True
    assert result["first_start"] is None
    assert result["best_opened_fraction"] == 1.0


def test_many_tests_averages():
    out = run_solvability_many_tests(4, 4, 0, 3, rng=random.Random(0))

    assert out["solvable_rate"] == 1.0
    assert out["avg_mine_count"] == 0.0
    assert out["avg_safe_count"] == 16.0
    assert out["avg_successful_starts"] == 16.0


def test_many_tests_rate_is_a_fraction():
    out = run_solvability_many_tests(5, 5, 30, 8, rng=random.Random(3))
    assert 0.0 <= out["solvable_rate"] <= 1.0
    assert 0.0 <= out["avg_best_opened_fraction"] <= 1.0


def test_many_tests_rejects_zero_runs():
    with pytest.raises(ValueError):
        run_solvability_many_tests(3, 3, 10, 0)


def test_density_sweep_without_plot():
    rates = run_density_sweep(3, 3, [0, 100], 2, rng=random.Random(0), plot=False)

    assert isinstance(rates, np.ndarray)
    np.testing.assert_allclose(rates, [1.0, 1.0])
