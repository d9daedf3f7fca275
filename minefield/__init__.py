"""
Minefield Generator

Generates random minefields and decides whether a field can be fully opened
from some start cell using only local deduction:
- Flood fill: a revealed 0 opens all of its neighbors
- Mine saturation: count == inferred mines + unknown neighbors -> all unknown are mines
- Safe saturation: count == inferred mines -> all unknown neighbors are safe
"""

from .field import (
    Field,
    InvalidDimensions,
    Mismatch,
    ResourceExhausted,
    compute_counts,
    format_field,
    generate,
    validate,
)
from .solver import DeductiveSolver, attempt_solve
from .search import (
    SearchReport,
    check_solvability,
    find_solvable_start,
    generate_solvable,
)
from .persistence import dumps_field, load_field, loads_field, save_field
from .analysis import (
    format_solver_state,
    run_density_sweep,
    run_preset_analysis,
    run_solvability_many_tests,
    run_solvability_single_test,
)

__version__ = "1.0.0"

__all__ = [
    # Core classes
    "Field",
    "DeductiveSolver",
    "SearchReport",
    "Mismatch",
    # Errors
    "InvalidDimensions",
    "ResourceExhausted",
    # Field operations
    "compute_counts",
    "generate",
    "validate",
    "format_field",
    # Deduction and search
    "attempt_solve",
    "find_solvable_start",
    "check_solvability",
    "generate_solvable",
    # Persistence
    "dumps_field",
    "loads_field",
    "save_field",
    "load_field",
    # Analysis functions
    "format_solver_state",
    "run_solvability_single_test",
    "run_solvability_many_tests",
    "run_density_sweep",
    "run_preset_analysis",
]
