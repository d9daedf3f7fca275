"""Utility functions for minefield generation and deduction."""

from typing import Dict, List, Tuple

# Module-level cache: (rows, cols) -> ((neighbor_idx, ...), ...) indexed by flat cell index
_NEIGHBORHOODS_CACHE: Dict[Tuple[int, int], Tuple[Tuple[int, ...], ...]] = {}


def cell_index(row: int, col: int, cols: int) -> int:
    """Return the flat index of (row, col) in a row-major grid with `cols` columns."""
    return row * cols + col


def cell_coords(idx: int, cols: int) -> Tuple[int, int]:
    """Return (row, col) for a flat row-major index."""
    return divmod(idx, cols)


def get_neighborhoods(rows: int, cols: int) -> Tuple[Tuple[int, ...], ...]:
    """
    Precompute and cache 8-connected neighbor indices for every cell in a grid.

    Args:
        rows: Grid height (number of rows). Must be positive.
        cols: Grid width (number of columns). Must be positive.

    Returns:
        A tuple indexed by flat cell index `row * cols + col`; each entry is a
        tuple of the flat indices of the in-bounds neighbors, in row-major order.

    Raises:
        ValueError: If rows or cols is non-positive.
    """
    if rows <= 0 or cols <= 0:
        raise ValueError("rows and cols must be positive.")

    key = (rows, cols)
    cached = _NEIGHBORHOODS_CACHE.get(key)
    if cached is not None:
        return cached

    neighborhoods: List[Tuple[int, ...]] = []
    for r in range(rows):
        for c in range(cols):
            nbrs: List[int] = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < rows and 0 <= nc < cols:
                        nbrs.append(nr * cols + nc)
            neighborhoods.append(tuple(nbrs))

    result = tuple(neighborhoods)
    _NEIGHBORHOODS_CACHE[key] = result
    return result


def clamp_density(density: int) -> int:
    """Clamp a mine density percentage into [0, 100]."""
    return max(0, min(100, int(density)))
