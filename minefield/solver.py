"""Deductive minefield solver using local saturation rules and flood fill."""

from collections import deque
from typing import Any, Deque, Dict, List, Optional, Tuple, cast

from .field import Field, allocate
from .utils import cell_coords


class DeductiveSolver:
    """
    Decide how much of a field opens from one start cell by pure local deduction.

    Each run applies, until a fixed point:
    1. Flood fill: a revealed 0 opens every neighbor.
    2. Mine saturation: if a revealed count equals its inferred-mine neighbors
       plus its unknown neighbors, all unknown neighbors are mines.
    3. Safe saturation: if a revealed count equals its inferred-mine
       neighbors, all unknown neighbors are safe and get opened.

    No reasoning across overlapping constraints is attempted, so a field that
    only opens with paired or global inference counts as unsolved.
    """

    def __init__(self, field: Field, record_steps: bool = False) -> None:
        """
        Bind a solver to a field. The field is only read, never mutated.

        Args:
            field: The minefield to analyse.
            record_steps: If True, snapshot the opened and inferred sets after
                the first reveal and after every deduction pass.
        """
        self.field = field
        self.record_steps = record_steps

        # state[i]: None -> unopened, int -> opened with that revealed count
        self.state: List[Optional[int]] = allocate(field.size, None)
        # inferred_mine[i]: proven mine; only ever flips False -> True within a run
        self.inferred_mine: List[bool] = allocate(field.size, False)

        self._reset()

    def _reset(self) -> None:
        """Clear the per-run buffers in place and zero the counters."""
        size = self.field.size
        if len(self.state) != size:
            self.state = allocate(size, None)
            self.inferred_mine = allocate(size, False)
        else:
            for i in range(size):
                self.state[i] = None
                self.inferred_mine[i] = False

        self.start: Optional[Tuple[int, int]] = None
        self.opened_count: int = 0
        self.success: bool = False

        # Metrics / counters (for analysis)
        self.passes_count: int = 0
        self.flood_opened_count: int = 0
        self.inferred_mine_count: int = 0
        self.safe_opened_count: int = 0

        self.steps_history: List[Dict[str, Any]] = []
        self._current_method: str = "first_move"

    # -------------------------------------------------------------------------
    # Core functionality methods
    # -------------------------------------------------------------------------

    def _open_cell(self, idx: int) -> None:
        """Open one safe cell and cascade through any connected zero counts."""
        counts = self.field.counts
        is_mine = self.field.is_mine

        self.state[idx] = counts[idx]
        if counts[idx] != 0:
            return

        frontier: Deque[int] = deque([idx])
        while frontier:
            cur = frontier.popleft()
            for n in self.field.neighbor_indices(cur):
                if is_mine[n] or self.state[n] is not None:
                    continue
                self.state[n] = counts[n]
                self.flood_opened_count += 1
                if counts[n] == 0:
                    frontier.append(n)

    def _apply_rules(self, idx: int) -> bool:
        """
        Apply both saturation rules around one opened cell.

        Returns:
            True if any neighbor was opened or inferred to be a mine.
        """
        revealed = cast(int, self.state[idx])

        known_mines = 0
        unknown: List[int] = []
        for n in self.field.neighbor_indices(idx):
            if self.inferred_mine[n]:
                known_mines += 1
            elif self.state[n] is None:
                unknown.append(n)

        if not unknown:
            return False

        if revealed == known_mines + len(unknown):
            for n in unknown:
                self.inferred_mine[n] = True
            self.inferred_mine_count += len(unknown)
            return True

        if revealed == known_mines:
            for n in unknown:
                # An earlier cell of this list may have flooded into this one
                if self.state[n] is None:
                    self.safe_opened_count += 1
                    self._open_cell(n)
            return True

        return False

    def _record_step(self) -> None:
        """Record a snapshot for replay and monotonicity checks."""
        if not self.record_steps:
            return
        self.steps_history.append({
            "method": self._current_method,
            "step_number": len(self.steps_history),
            "pass_number": self.passes_count,
            "state_snapshot": list(self.state),
            "inferred_snapshot": list(self.inferred_mine),
        })

    def attempt_solve(self, start_row: int, start_col: int) -> Tuple[int, bool]:
        """
        Open (start_row, start_col) and deduce until nothing more can be opened.

        Args:
            start_row: Row of the first opened cell.
            start_col: Column of the first opened cell.

        Returns:
            Tuple of (opened_count, success) where opened_count is the number of
            safe cells opened and success is True iff every safe cell was opened.
            Starting on a mine returns (0, False).

        Raises:
            ValueError: If the start cell is outside the field.
        """
        start_idx = self.field.index(start_row, start_col)
        self._reset()
        self.start = (start_row, start_col)

        if self.field.is_mine[start_idx]:
            return 0, False

        self._current_method = "first_move"
        self._open_cell(start_idx)
        self._record_step()

        self._current_method = "deduction_pass"
        changed = True
        while changed:
            changed = False
            self.passes_count += 1
            for idx in range(self.field.size):
                if self.state[idx] is None:
                    continue
                if self._apply_rules(idx):
                    changed = True
            if changed:
                self._record_step()

        is_mine = self.field.is_mine
        self.opened_count = sum(
            1 for i, s in enumerate(self.state) if s is not None and not is_mine[i]
        )
        self.success = self.opened_count == self.field.safe_count
        return self.opened_count, self.success

    # -------------------------------------------------------------------------
    # Inspection
    # -------------------------------------------------------------------------

    def inferred_mines(self) -> List[Tuple[int, int]]:
        """Return coordinates of every cell proven to be a mine in the last run."""
        return [
            cell_coords(i, self.field.cols)
            for i, flag in enumerate(self.inferred_mine)
            if flag
        ]

    def state_grid(self) -> List[List[Optional[str]]]:
        """
        Return the last run's view of the field.

        Each entry is None (unopened), "F" (inferred mine) or the revealed
        count as a string.
        """
        grid: List[List[Optional[str]]] = []
        for r in range(self.field.rows):
            row: List[Optional[str]] = []
            for c in range(self.field.cols):
                i = r * self.field.cols + c
                if self.inferred_mine[i]:
                    row.append("F")
                elif self.state[i] is not None:
                    row.append(str(self.state[i]))
                else:
                    row.append(None)
            grid.append(row)
        return grid

    def summary(self) -> Dict[str, Any]:
        """Return the last run's result and counters."""
        return {
            "start": self.start,
            "opened_count": self.opened_count,
            "success": self.success,
            "safe_count": self.field.safe_count,
            "passes_count": self.passes_count,
            "flood_opened_count": self.flood_opened_count,
            "inferred_mine_count": self.inferred_mine_count,
            "safe_opened_count": self.safe_opened_count,
            "steps_history": self.steps_history,
        }


def attempt_solve(field: Field, start_row: int, start_col: int) -> Tuple[int, bool]:
    """Run a fresh `DeductiveSolver` on `field` from (start_row, start_col)."""
    return DeductiveSolver(field).attempt_solve(start_row, start_col)
