"""Plain-text serialization of minefields."""

import logging
from pathlib import Path
from typing import List, Union

from .field import Field, validate

logger = logging.getLogger(__name__)

MINE_GLYPH = "M"


def dumps_field(field: Field) -> str:
    """
    Serialize a field to text.

    The first line is "rows cols mine_count"; it is followed by one line per
    row where a mine is 'M' and a safe cell is its count digit.
    """
    lines: List[str] = [f"{field.rows} {field.cols} {field.mine_count}"]
    for r in range(field.rows):
        chars: List[str] = []
        for c in range(field.cols):
            i = r * field.cols + c
            chars.append(MINE_GLYPH if field.is_mine[i] else str(field.counts[i]))
        lines.append("".join(chars))
    return "\n".join(lines) + "\n"


def loads_field(text: str) -> Field:
    """
    Parse text produced by `dumps_field`.

    Raises:
        ValueError: If the header or body is malformed, the mine count does not
            match the layout, or a stored digit disagrees with the layout.
    """
    lines = text.splitlines()
    if not lines:
        raise ValueError("Empty field file.")

    header = lines[0].split()
    if len(header) != 3:
        raise ValueError(f"Expected header 'rows cols mines', got {lines[0]!r}.")
    try:
        rows, cols, mines = (int(v) for v in header)
    except ValueError as exc:
        raise ValueError(f"Header values must be integers: {lines[0]!r}.") from exc

    body = lines[1:]
    while body and not body[-1].strip():
        body.pop()
    if len(body) != rows:
        raise ValueError(f"Expected {rows} rows, got {len(body)}.")

    layout: List[List[bool]] = []
    stored: List[List[int]] = []
    for r, line in enumerate(body):
        if len(line) != cols:
            raise ValueError(f"Row {r} has {len(line)} cells, expected {cols}.")
        mine_row: List[bool] = []
        count_row: List[int] = []
        for c, ch in enumerate(line):
            if ch == MINE_GLYPH:
                mine_row.append(True)
                count_row.append(0)
            elif ch in "012345678":
                mine_row.append(False)
                count_row.append(int(ch))
            else:
                raise ValueError(f"Unexpected glyph {ch!r} at ({r}, {c}).")
        layout.append(mine_row)
        stored.append(count_row)

    field = Field.from_layout(layout)
    if field.mine_count != mines:
        raise ValueError(
            f"Header declares {mines} mines but the layout has {field.mine_count}."
        )

    for r in range(rows):
        for c in range(cols):
            i = r * cols + c
            if not field.is_mine[i] and field.counts[i] != stored[r][c]:
                raise ValueError(
                    f"Cell ({r}, {c}) stores {stored[r][c]} but has "
                    f"{field.counts[i]} adjacent mines."
                )
    return field


def save_field(
    field: Field, path: Union[str, Path], require_valid: bool = True
) -> Path:
    """
    Write a field to `path`.

    Args:
        field: Field to persist.
        path: Destination file; overwritten if it exists.
        require_valid: If True, refuse to write a field whose counts fail validation.

    Returns:
        The destination path.

    Raises:
        ValueError: If require_valid is set and the field has count mismatches.
    """
    if require_valid:
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
            raise ValueError(
                f"Refusing to save a field with {len(mismatches)} count mismatches."
            )

    dest = Path(path)
    dest.write_text(dumps_field(field), encoding="utf-8")
    logger.info("Saved %r to %s", field, dest)
    return dest


def load_field(path: Union[str, Path]) -> Field:
    """Read a field written by `save_field`."""
    return loads_field(Path(path).read_text(encoding="utf-8"))
