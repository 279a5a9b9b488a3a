"""Tests for the command line interface and text rendering."""

from typer.testing import CliRunner

from . import cli, clues, reporter

PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

runner = CliRunner()


def test_render_plain_is_space_separated_rows():
    text = reporter.render_plain(clues.puzzle_to_rows(SOLUTION))
    lines = text.splitlines()
    assert len(lines) == 9
    assert lines[0] == "5 3 4 6 7 8 9 1 2"


def test_pretty_board_formatting_contains_grid_lines():
    pretty = reporter.render_pretty(clues.puzzle_to_rows(PUZZLE))
    assert "------" in pretty
    assert pretty.count("\n") == 10
    assert pretty.splitlines()[0] == "5 3 . | . 7 . | . . ."


def test_pretty_board_separates_bands_with_rules():
    lines = reporter.render_pretty(clues.puzzle_to_rows(PUZZLE)).splitlines()
    assert [i for i, line in enumerate(lines) if line.startswith("-")] == [3, 7]
    assert lines[3] == "------+-------+------"
    assert lines[-1] == ". . . | . 8 . | . 7 9"


def test_solve_puzzle_option_prints_solution():
    result = runner.invoke(cli.app, ["solve", "--puzzle", PUZZLE])
    assert result.exit_code == 0, result.output
    assert result.output.splitlines()[0] == "5 3 4 6 7 8 9 1 2"


def test_solve_compact_arguments():
    args = ["solve", "--pretty"] + [str(v) for v in clues.SAMPLE_CLUES]
    result = runner.invoke(cli.app, args)
    assert result.exit_code == 0, result.output
    assert "|" in result.output


def test_solve_from_file(tmp_path):
    path = tmp_path / "puzzle.txt"
    path.write_text("# sample\n" + "\n".join(PUZZLE[i : i + 9] for i in range(0, 81, 9)) + "\n")
    result = runner.invoke(cli.app, ["solve", "--file", str(path)])
    assert result.exit_code == 0, result.output
    assert "5 3 4 6 7 8 9 1 2" in result.output


def test_conflicting_clues_exit_code_two():
    result = runner.invoke(cli.app, ["solve", "156", "196"])
    assert result.exit_code == 2
    assert "Invalid puzzle" in result.output


def test_unsatisfiable_exit_code_one():
    row = [str(100 + c * 10 + c) for c in range(1, 9)]
    result = runner.invoke(cli.app, ["solve", *row, "599"])
    assert result.exit_code == 1
    assert "No solution" in result.output


def test_max_steps_from_environment():
    result = runner.invoke(cli.app, ["solve"], env={"SUDOKU_MAX_STEPS": "2"})
    assert result.exit_code == 1
    assert "Step limit of 2" in result.output


def test_validate_reports_duplicates():
    broken = "55" + SOLUTION[2:]
    result = runner.invoke(cli.app, ["validate", broken])
    assert result.exit_code == 1
    assert "r1: repeated 5" in result.output


def test_validate_accepts_solution_against_original():
    result = runner.invoke(cli.app, ["validate", SOLUTION, "--original", PUZZLE])
    assert result.exit_code == 0
    assert "consistent" in result.output
