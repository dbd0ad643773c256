"""Tests for the command line tools."""

import json
from pathlib import Path

import pytest

from labyrinth.cli import main
from labyrinth.core.maze_parser import load_maze_file, read_maze_data

MAZES_DIR = Path(__file__).resolve().parent.parent / "mazes"
SERPENTINE = str(MAZES_DIR / "serpentine.txt")


def test_no_command(capsys):
    """Test that running without a command prints usage and exits with 2."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
    assert "usage: labyrinth" in capsys.readouterr().err


def test_unknown_command(capsys):
    """Test that an unknown command is rejected by the parser."""
    with pytest.raises(SystemExit) as exc_info:
        main(["fly"])
    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_solve(capsys):
    """Test solving the sample maze with an explicit strategy."""
    assert main(["solve", SERPENTINE, "--strategy", "sequential"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["strategy"] == "sequential"
    assert data["found"] is True
    assert data["length"] == 54
    assert data["path"][0] == [0, 0]
    assert data["path"][-1] == [5, 0]


def test_solve_default_strategy(capsys):
    """Test that solve falls back to the configured strategy."""
    assert main(["solve", SERPENTINE]) == 0
    assert json.loads(capsys.readouterr().out)["strategy"] == "parallel"


def test_solve_without_path(capsys):
    """Test that a maze with no route exits with 2."""
    assert main(["solve", str(MAZES_DIR / "locked_out.txt")]) == 2
    data = json.loads(capsys.readouterr().out)
    assert data["found"] is False
    assert data["path"] is None


def test_solve_unknown_strategy(capsys):
    """Test that only known strategies are accepted."""
    with pytest.raises(SystemExit) as exc_info:
        main(["solve", SERPENTINE, "--strategy", "dfs"])
    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_show(capsys):
    """Test printing every cell of a maze."""
    assert main(["show", SERPENTINE]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Dimensions: (6, 9)")
    assert "Key: True" in out


def test_show_bits(capsys):
    """Test printing the encoded maze as bit text, three bytes per line."""
    assert main(["show", SERPENTINE, "--bits"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 27
    assert all(len(line.split()) == 3 for line in lines)
    assert all(set(line) <= {"0", "1", " "} for line in lines)


def test_info(capsys):
    """Test printing maze metadata as JSON."""
    assert main(["info", SERPENTINE]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "Serpentine"
    assert data["slug"] == "serpentine"
    assert data["source"] == SERPENTINE
    assert data["rows"] == 6
    assert data["keys"] == [[1, 4]]
    assert data["exits"] == [[5, 0]]
    assert data["door_count"] == 2


def test_convert(tmp_path, capsys):
    """Test packing a bit-text file into a binary file."""
    output = tmp_path / "serpentine.bin"
    assert main(["convert", SERPENTINE, str(output)]) == 0
    assert json.loads(capsys.readouterr().out)["bytes"] == 81
    assert len(output.read_bytes()) == 81


def test_export_bin(tmp_path, capsys):
    """Test exporting a decoded maze as binary."""
    output = tmp_path / "serpentine.bin"
    assert main(["export", SERPENTINE, str(output)]) == 0
    assert json.loads(capsys.readouterr().out)["bytes"] == 81
    assert output.read_bytes() == read_maze_data(SERPENTINE)


def test_export_txt(tmp_path, capsys):
    """Test exporting a decoded maze as bit text that loads back unchanged."""
    output = tmp_path / "copy.txt"
    assert main(["export", SERPENTINE, str(output)]) == 0

    exported = load_maze_file(output).maze
    original = load_maze_file(SERPENTINE).maze
    assert exported.walls_graph == original.walls_graph
    assert exported.doors_graph == original.doors_graph
    assert len(exported.get_shortest_path()) == 54


def test_benchmark(capsys):
    """Test timing both engines on the sample maze."""
    assert main(["benchmark", SERPENTINE, "--repeat", "1"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["same_length"] is True
    assert data["sequential_length"] == 54


def test_benchmark_zero_repeat(capsys):
    """Test that a zero repeat count is reported as an error."""
    assert main(["benchmark", SERPENTINE, "--repeat", "0"]) == 1
    assert "ValueError" in capsys.readouterr().err


def test_missing_file(capsys):
    """Test that a missing maze file is reported as JSON on stderr."""
    assert main(["show", "/nonexistent/maze.bin"]) == 1
    assert "FileNotFoundError" in capsys.readouterr().err


def test_serve(monkeypatch):
    """Test that serve hands the app to uvicorn."""
    calls = []
    monkeypatch.setattr("labyrinth.cli.uvicorn.run", lambda app, **kw: calls.append((app, kw)))
    assert main(["serve", "--host", "0.0.0.0", "--port", "9000"]) == 0
    app, kwargs = calls[0]
    assert app == "labyrinth.main:app"
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9000
