import random

import pytest

from minefield import Field


# Single mine at (0,1). From (2,3) the flood opens everything except the top-left
# pair; mine saturation then proves (0,1) and safe saturation opens (0,0).
#   1 M 1 0
#   1 1 1 0
#   0 0 0 0
CHAIN_LAYOUT = [
    [False, True, False, False],
    [False, False, False, False],
    [False, False, False, False],
]


@pytest.fixture
def chain_field():
    return Field.from_layout(CHAIN_LAYOUT)


@pytest.fixture
def corner_mine_2x2():
    """2x2 field with a mine at (0,0); every start needs a guess."""
    return Field.from_layout([[True, False], [False, False]])


@pytest.fixture
def rng():
    return random.Random(1234)
