from minefield import load_field, validate
from minefield.__main__ import EXIT_ERROR, EXIT_OK, EXIT_UNSOLVABLE, main


def test_generates_and_saves(tmp_path, capsys):
    dest = tmp_path / "field.txt"

    code = main(["--rows", "4", "--cols", "5", "--density", "0", "--seed", "1",
                 "--output", str(dest), "--show"])

    assert code == EXIT_OK
    field = load_field(dest)
    assert (field.rows, field.cols, field.mine_count) == (4, 5, 0)
    assert validate(field) == []
    assert "solvable from (0, 0)" in capsys.readouterr().out


def test_all_mine_field_reports_no_safe_cells(capsys):
    assert main(["--rows", "2", "--cols", "2", "--density", "100"]) == EXIT_OK
    assert "no safe cells" in capsys.readouterr().out


def test_invalid_dimensions_exit_code():
    assert main(["--rows", "0"]) == EXIT_ERROR


def test_invalid_attempts_exit_code():
    assert main(["--max-attempts", "0"]) == EXIT_ERROR


def test_unsolvable_exit_code(monkeypatch):
    import minefield.__main__ as cli
    from minefield import SearchReport

    monkeypatch.setattr(cli, "generate_solvable", lambda *a, **k: SearchReport(False, None, 3))
    assert main(["--rows", "3", "--cols", "3"]) == EXIT_UNSOLVABLE
