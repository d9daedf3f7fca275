import random

import pytest

import minefield.field as field_module
from minefield import (
    Field,
    InvalidDimensions,
    Mismatch,
    ResourceExhausted,
    compute_counts,
    format_field,
    generate,
    validate,
)


def test_new_field_is_empty():
    field = Field(3, 4)

    assert field.rows == 3
    assert field.cols == 4
    assert field.mine_count == 0
    assert field.safe_count == 12
    assert field.is_mine == [False] * 12
    assert field.counts == [0] * 12


@pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-2, 3), (3, -2)])
def test_non_positive_dimensions_raise(rows, cols):
    with pytest.raises(InvalidDimensions):
        Field(rows, cols)


def test_invalid_dimensions_is_a_value_error():
    with pytest.raises(ValueError):
        Field(0, 0)


def test_non_integer_dimensions_raise():
    with pytest.raises(InvalidDimensions):
        Field(2.5, 3)


def test_huge_field_raises_resource_exhausted():
    with pytest.raises(ResourceExhausted):
        Field(10**10, 10**10)


def test_neighbor_table_allocation_failure_raises_resource_exhausted(monkeypatch):
    def out_of_memory(rows, cols):
        raise MemoryError

    monkeypatch.setattr(field_module, "get_neighborhoods", out_of_memory)

    with pytest.raises(ResourceExhausted):
        Field(3, 3)


def test_index_is_row_major():
    field = Field(3, 5)

    assert field.index(0, 0) == 0
    assert field.index(2, 3) == 13


@pytest.mark.parametrize("row,col", [(-1, 0), (3, 0), (0, 5), (0, -1)])
def test_index_outside_field_raises(row, col):
    with pytest.raises(ValueError):
        Field(3, 5).index(row, col)


def test_counts_for_corner_mine(corner_mine_2x2):
    """Mine at (0,0): every other cell of a 2x2 touches it exactly once."""
    field = corner_mine_2x2

    assert field.mine_count == 1
    assert field.count_at(0, 0) == 0
    assert field.count_at(0, 1) == 1
    assert field.count_at(1, 0) == 1
    assert field.count_at(1, 1) == 1


def test_counts_for_empty_strip():
    field = Field(1, 2)
    compute_counts(field)
    assert field.counts == [0, 0]


def test_counts_chain_layout(chain_field):
    assert chain_field.counts == [
        1, 0, 1, 0,
        1, 1, 1, 0,
        0, 0, 0, 0,
    ]
    assert chain_field.mine_positions() == [(0, 1)]


def test_compute_counts_is_idempotent(rng):
    field = generate(Field(7, 9), 30, rng)
    first = list(field.counts)
    compute_counts(field)
    assert field.counts == first
    compute_counts(field)
    assert field.counts == first


def test_set_mine_recomputes_counts():
    field = Field(3, 3)
    field.set_mine(1, 1)

    assert field.mine_count == 1
    assert all(field.count_at(r, c) == 1 for r, c in field.neighbors(1, 1))

    field.set_mine(1, 1, False)
    assert field.mine_count == 0
    assert field.counts == [0] * 9


def test_neighbors_and_bounds():
    field = Field(3, 3)
    assert field.neighbors(0, 0) == [(0, 1), (1, 0), (1, 1)]
    with pytest.raises(ValueError):
        field.is_mine_at(3, 0)


def test_from_layout_rejects_ragged_rows():
    with pytest.raises(InvalidDimensions):
        Field.from_layout([[True, False], [False]])


def test_copy_is_independent(chain_field):
    other = chain_field.copy()
    other.set_mine(2, 2)

    assert chain_field.mine_count == 1
    assert other.mine_count == 2
    assert chain_field.count_at(1, 1) == 1


def test_generate_zero_density_has_no_mines(rng):
    field = generate(Field(5, 5), 0, rng)
    assert field.mine_count == 0
    assert field.counts == [0] * 25


def test_generate_full_density_fills_every_cell(rng):
    field = generate(Field(4, 6), 100, rng)
    assert field.mine_count == 24
    assert field.safe_count == 0
    assert validate(field) == []


def test_generate_clamps_density(rng):
    assert generate(Field(4, 4), -20, rng).mine_count == 0
    assert generate(Field(4, 4), 500, rng).mine_count == 16


def test_generate_draws_one_value_per_cell_in_row_major_order():
    field = generate(Field(6, 5), 35, random.Random(7))

    draws = random.Random(7)
    expected = [draws.randrange(100) < 35 for _ in range(30)]
    assert field.is_mine == expected
    assert field.mine_count == sum(expected)


def test_generate_is_reproducible_with_seed():
    a = generate(Field(8, 8), 20, random.Random(99))
    b = generate(Field(8, 8), 20, random.Random(99))
    assert a.is_mine == b.is_mine
    assert a.counts == b.counts


def test_regenerate_clears_previous_layout():
    field = generate(Field(5, 5), 100, random.Random(1))
    generate(field, 0, random.Random(1))
    assert field.mine_count == 0
    assert not any(field.is_mine)


@pytest.mark.parametrize("seed", range(10))
def test_generated_fields_validate(seed):
    field = generate(Field(9, 11), 25, random.Random(seed))
    assert validate(field) == []


def test_validate_reports_mismatches(chain_field):
    chain_field.counts[chain_field.index(2, 0)] = 3

    mismatches = validate(chain_field)

    assert mismatches == [Mismatch(2, 0, 3, 0)]


def test_validate_ignores_mine_cells(chain_field):
    chain_field.counts[chain_field.index(0, 1)] = 7
    assert validate(chain_field) == []


def test_format_field_without_coords():
    field = Field.from_layout([[False, False, True]])

    assert format_field(field, show_coords=False) == " .  1  M"
    assert format_field(field, show_mines=False, show_coords=False) == " .  1  #"


def test_format_field_with_coords(corner_mine_2x2):
    lines = format_field(corner_mine_2x2).splitlines()

    assert lines[0] == "    0  1"
    assert lines[1] == "   -----"
    assert lines[2] == " 0 | M  1"
    assert lines[3] == " 1 | 1  1"


def test_format_field_color_marks_mines(corner_mine_2x2):
    text = format_field(corner_mine_2x2, color=True)
    assert "\033[91mM\033[0m" in text
