import pytest

from minefield import Field, dumps_field, load_field, loads_field, save_field


def test_dumps_format(chain_field):
    assert dumps_field(chain_field) == "3 4 1\n1M10\n1110\n0000\n"


def test_dumps_all_mines():
    field = Field.from_layout([[True, True]])
    assert dumps_field(field) == "1 2 2\nMM\n"


def test_loads_rebuilds_field(chain_field):
    field = loads_field("3 4 1\n1M10\n1110\n0000\n")

    assert (field.rows, field.cols, field.mine_count) == (3, 4, 1)
    assert field.is_mine == chain_field.is_mine
    assert field.counts == chain_field.counts


def test_save_and_load(tmp_path, chain_field):
    path = save_field(chain_field, tmp_path / "field.txt")

    assert path.read_text(encoding="utf-8") == dumps_field(chain_field)
    loaded = load_field(str(path))
    assert loaded.is_mine == chain_field.is_mine


def test_save_refuses_invalid_field(tmp_path, chain_field):
    chain_field.counts[0] = 5
    dest = tmp_path / "bad.txt"

    with pytest.raises(ValueError):
        save_field(chain_field, dest)
    assert not dest.exists()


def test_save_without_validation_writes_stored_counts(tmp_path, chain_field):
    chain_field.counts[0] = 5
    path = save_field(chain_field, tmp_path / "raw.txt", require_valid=False)
    assert path.read_text(encoding="utf-8").splitlines()[1] == "5M10"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "3 4\n1M10\n1110\n0000\n",
        "a b c\n",
        "3 4 1\n1M10\n1110\n",
        "3 4 1\n1M10\n111\n0000\n",
        "3 4 1\n1X10\n1110\n0000\n",
        "3 4 2\n1M10\n1110\n0000\n",
        "3 4 1\n1M10\n1120\n0000\n",
        "0 0 0\n",
    ],
)
def test_loads_rejects_malformed_text(text):
    with pytest.raises(ValueError):
        loads_field(text)
