"""Default parameters and named presets for field generation."""

from typing import Dict, Tuple

DEFAULT_ROWS = 8
DEFAULT_COLS = 8
DEFAULT_DENSITY = 15  # percent

# Practical ceiling for regenerate-and-search; near 100% density almost nothing is solvable
DEFAULT_MAX_ATTEMPTS = 1000

# name -> (rows, cols, density)
PRESETS: Dict[str, Tuple[int, int, int]] = {
    "beginner": (9, 9, 12),
    "intermediate": (16, 16, 15),
    "expert": (16, 30, 20),
}
