"""Tests for the solver trace recorder."""

import csv

from src.sudoku.grid import parse_grid
from src.sudoku.solver_core import solve
from src.utils.trace import Tracer, enable_tracing, get_tracer, reset_tracer

PUZZLE = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"


def test_tracer_captures_steps():
    tracer = Tracer()
    tracer.log_seed_box(0, 0, [3, 1, 2, 9, 8, 7, 6, 5, 4])
    tracer.log_place(0, 3, 5, depth=0)
    tracer.log_backtrack(0, 3, 5, depth=0)
    tracer.log_dead_end(0, 3, depth=0)
    tracer.log_clear(4, 4, 7, filled=80)
    tracer.log_solution_found(filled=81)

    summary = tracer.summary()
    assert summary["total_steps"] == 6
    assert summary["num_placements"] == 1
    assert summary["num_backtracks"] == 1
    assert [s.step_number for s in tracer.steps] == [1, 2, 3, 4, 5, 6]
    assert tracer.steps[0].reason == "312987654"


def test_disabled_tracer_records_nothing():
    tracer = Tracer(enabled=False)
    grid = parse_grid(PUZZLE)
    assert solve(grid, tracer)
    assert tracer.steps == []


def test_solver_trace_written_to_csv(tmp_path):
    tracer = Tracer()
    solve(parse_grid(PUZZLE), tracer)

    output_path = tmp_path / "traces" / "classic.csv"
    tracer.to_csv(output_path)

    with open(output_path, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == len(tracer.steps)
    assert rows[0]["action_type"] == "place"
    assert rows[-1]["action_type"] == "solution_found"
    assert rows[-1]["filled"] == "81"


def test_empty_trace_writes_no_file(tmp_path):
    output_path = tmp_path / "empty.csv"
    Tracer().to_csv(output_path)
    assert not output_path.exists()


def test_global_tracer_lifecycle(monkeypatch):
    reset_tracer()
    first = get_tracer()
    assert get_tracer() is first
    enable_tracing(False)
    assert not first.enabled

    reset_tracer()
    assert get_tracer() is not first

    monkeypatch.setenv("SUDOKU_TRACE", "off")
    reset_tracer()
    assert not get_tracer().enabled

    monkeypatch.delenv("SUDOKU_TRACE")
    reset_tracer()
    assert get_tracer().enabled
    reset_tracer()
