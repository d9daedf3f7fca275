"""Minefield data model: mine layout, neighbor counts, random generation and validation."""

import logging
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .utils import cell_coords, cell_index, clamp_density, get_neighborhoods

logger = logging.getLogger(__name__)


class InvalidDimensions(ValueError):
    """Raised when a field is created with a non-positive number of rows or columns."""


class ResourceExhausted(MemoryError):
    """Raised when the buffers for a field or a solver run cannot be allocated."""


@dataclass(frozen=True)
class Mismatch:
    """A non-mine cell whose stored count disagrees with its true neighbor-mine count."""

    row: int
    col: int
    stored: int
    actual: int


def allocate(size: int, fill: object) -> list:
    """
    Allocate a flat buffer of `size` copies of `fill`.

    Raises:
        ResourceExhausted: If the interpreter cannot allocate the buffer.
    """
    try:
        return [fill] * size
    except (MemoryError, OverflowError) as exc:
        raise ResourceExhausted(f"Cannot allocate a buffer of {size} cells.") from exc


class Field:
    """Rectangular minefield stored as flat row-major buffers."""

    def __init__(self, rows: int, cols: int) -> None:
        """
        Create an empty field (no mines, all counts zero).

        Args:
            rows: Number of rows, must be > 0.
            cols: Number of columns, must be > 0.

        Raises:
            InvalidDimensions: If either dimension is not a positive integer.
            ResourceExhausted: If the cell buffers cannot be allocated.
        """
        if (
            not isinstance(rows, int)
            or not isinstance(cols, int)
            or isinstance(rows, bool)
            or isinstance(cols, bool)
        ):
            raise InvalidDimensions("rows and cols must be integers.")
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(
                f"rows and cols must be positive, got {rows}x{cols}."
            )

        self.rows: int = rows
        self.cols: int = cols

        size = rows * cols
        self.is_mine: List[bool] = allocate(size, False)
        self.counts: List[int] = allocate(size, 0)
        self.mine_count: int = 0

        try:
            self._neighborhoods: Tuple[Tuple[int, ...], ...] = get_neighborhoods(
                rows, cols
            )
        except MemoryError as exc:
            raise ResourceExhausted(
                f"Cannot allocate the neighbor table for a {rows}x{cols} field."
            ) from exc

    @classmethod
    def from_layout(cls, layout: Sequence[Sequence[bool]]) -> "Field":
        """
        Build a field from an explicit mine layout and derive its counts.

        Args:
            layout: One sequence per row; truthy entries are mines. All rows
                must have the same length.

        Raises:
            InvalidDimensions: If the layout is empty or ragged.
        """
        rows = len(layout)
        cols = len(layout[0]) if rows else 0
        if any(len(row) != cols for row in layout):
            raise InvalidDimensions("All layout rows must have the same length.")

        field = cls(rows, cols)
        for r, row in enumerate(layout):
            for c, value in enumerate(row):
                field.is_mine[r * cols + c] = bool(value)
        compute_counts(field)
        return field

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def safe_count(self) -> int:
        """Number of non-mine cells."""
        return self.size - self.mine_count

    def index(self, row: int, col: int) -> int:
        """
        Return the flat index of (row, col).

        Raises:
            ValueError: If the coordinates are outside the field.
        """
        if row < 0 or row >= self.rows or col < 0 or col >= self.cols:
            raise ValueError(
                f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} field."
            )
        return cell_index(row, col, self.cols)

    def neighbor_indices(self, idx: int) -> Tuple[int, ...]:
        """Return precomputed flat neighbor indices for a flat cell index."""
        return self._neighborhoods[idx]

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Return the in-bounds 8-neighbors of (row, col) as coordinates."""
        return [
            cell_coords(n, self.cols)
            for n in self._neighborhoods[self.index(row, col)]
        ]

    def is_mine_at(self, row: int, col: int) -> bool:
        return self.is_mine[self.index(row, col)]

    def count_at(self, row: int, col: int) -> int:
        return self.counts[self.index(row, col)]

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Return all mine coordinates in row-major order."""
        return [
            cell_coords(i, self.cols) for i, mine in enumerate(self.is_mine) if mine
        ]

    def set_mine(self, row: int, col: int, value: bool = True) -> None:
        """Place or remove a single mine and recompute counts."""
        self.is_mine[self.index(row, col)] = bool(value)
        compute_counts(self)

    def clear(self) -> None:
        """Remove all mines and zero every count."""
        for i in range(self.size):
            self.is_mine[i] = False
            self.counts[i] = 0
        self.mine_count = 0

    def copy(self) -> "Field":
        """Return an independent copy of this field."""
        other = Field(self.rows, self.cols)
        other.is_mine = list(self.is_mine)
        other.counts = list(self.counts)
        other.mine_count = self.mine_count
        return other

    def __repr__(self) -> str:
        return f"Field(rows={self.rows}, cols={self.cols}, mine_count={self.mine_count})"


def _true_count(field: Field, idx: int) -> int:
    return sum(1 for n in field.neighbor_indices(idx) if field.is_mine[n])


def compute_counts(field: Field) -> None:
    """
    Recompute every cell's neighbor-mine count from the current mine layout.

    Mine cells get a count of 0 (unused downstream). Also refreshes `mine_count`.
    """
    mines = 0
    for i in range(field.size):
        if field.is_mine[i]:
            field.counts[i] = 0
            mines += 1
            continue
        field.counts[i] = _true_count(field, i)
    field.mine_count = mines


def generate(
    field: Field, density: int, rng: Optional[random.Random] = None
) -> Field:
    """
    Fill the field with independently placed mines at the given density.

    Each cell, in row-major order, draws a uniform integer in [0, 100) and
    becomes a mine if the draw is below `density`. The result is not
    guaranteed to be solvable; see `search.generate_solvable`.

    Args:
        field: Field to regenerate in place.
        density: Mine probability in percent; clamped to [0, 100].
        rng: Random source. A fresh unseeded `random.Random` when omitted.

    Returns:
        The same field, for chaining.
    """
    percent = clamp_density(density)
    if percent != density:
        logger.debug("Density %s clamped to %d", density, percent)

    if rng is None:
        rng = random.Random()

    field.clear()
    for i in range(field.size):
        if rng.randrange(100) < percent:
            field.is_mine[i] = True

    compute_counts(field)
    logger.debug(
        "Generated %dx%d field at %d%%: %d mines",
        field.rows,
        field.cols,
        percent,
        field.mine_count,
    )
    return field


def validate(field: Field) -> List[Mismatch]:
    """
    Compare each non-mine cell's stored count against its true neighbor-mine count.

    Returns:
        All mismatches in row-major order; an empty list means the field is valid.
    """
    mismatches: List[Mismatch] = []
    for i in range(field.size):
        if field.is_mine[i]:
            continue
        actual = _true_count(field, i)
        if actual != field.counts[i]:
            r, c = cell_coords(i, field.cols)
            mismatches.append(Mismatch(r, c, field.counts[i], actual))
    return mismatches


# -------------------------------------------------------------------------
# Display
# -------------------------------------------------------------------------

_ANSI_RESET = "\033[0m"
_ANSI_COORD = "\033[96m"
_ANSI_MINE = "\033[91m"


def format_grid(
    cells: Iterable[Iterable[str]],
    cols: int,
    *,
    color: bool = False,
    show_coords: bool = True,
) -> str:
    """
    Lay out rows of single-character glyphs with optional coordinate labels.

    Args:
        cells: One iterable of glyphs per row.
        cols: Number of columns (for the header).
        color: If True, wrap coordinates and mines in ANSI colors.
        show_coords: If True, add a column header and row labels.
    """

    def coord(s: str) -> str:
        return f"{_ANSI_COORD}{s}{_ANSI_RESET}" if color else s

    def glyph(s: str) -> str:
        if color and s == "M":
            return f"{_ANSI_MINE}{s}{_ANSI_RESET}"
        return s

    out: List[str] = []
    if show_coords:
        header_cells = " ".join(f"{c:2d}" for c in range(cols))
        out.append(coord("   ") + coord(header_cells))
        out.append(coord("   " + "-" * (3 * cols - 1)))

    for r, row in enumerate(cells):
        row_cells = " ".join(f" {glyph(g)}" for g in row)
        if show_coords:
            out.append(coord(f"{r:2d} ") + coord("|") + row_cells)
        else:
            out.append(row_cells)

    return "\n".join(out)


def cell_glyph(field: Field, idx: int, show_mines: bool = True) -> str:
    """Return the display glyph of one cell: 'M' mine, '#' hidden mine, '.' zero, else digit."""
    if field.is_mine[idx]:
        return "M" if show_mines else "#"
    count = field.counts[idx]
    return "." if count == 0 else str(count)


def format_field(
    field: Field,
    show_mines: bool = True,
    *,
    color: bool = False,
    show_coords: bool = True,
) -> str:
    """
    Render the field as a multi-line string for terminal display.

    Args:
        field: Field to render (read-only).
        show_mines: If False, mines are drawn as '#' so they do not stand out.
        color: If True, use ANSI colors for coordinates and mines.
        show_coords: If True, include coordinate labels and a header.
    """
    rows = (
        [cell_glyph(field, r * field.cols + c, show_mines) for c in range(field.cols)]
        for r in range(field.rows)
    )
    return format_grid(rows, field.cols, color=color, show_coords=show_coords)
