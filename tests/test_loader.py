import json

import pandas as pd
import pytest

from src.sudoku.loader import load_puzzles

PUZZLE = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"
SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_puzzles(str(tmp_path / "nope.json"))


def test_csv_with_kaggle_columns(tmp_path):
    path = tmp_path / "sudoku.csv"
    pd.DataFrame(
        {"quizzes": [PUZZLE.replace(".", "0")], "solutions": [SOLUTION]}
    ).to_csv(path, index=False)

    records = load_puzzles(str(path))
    assert len(records) == 1
    assert records[0]["puzzle"] == PUZZLE.replace(".", "0")
    assert records[0]["solution"] == SOLUTION
    assert records[0]["id"] == "puzzle-0"


def test_json_array_and_object(tmp_path):
    array_path = tmp_path / "many.json"
    array_path.write_text(json.dumps([{"id": "a", "puzzle": PUZZLE}, {"grid": PUZZLE}, "skip"]))
    records = load_puzzles(str(array_path))
    assert [r["id"] for r in records] == ["a", "puzzle-1"]
    assert all(r["puzzle"] == PUZZLE for r in records)

    object_path = tmp_path / "one.json"
    object_path.write_text(json.dumps({"id": "solo", "board": PUZZLE}))
    assert load_puzzles(str(object_path))[0]["puzzle"] == PUZZLE


def test_nested_row_lists_are_flattened(tmp_path):
    rows = [[int(ch) if ch != "." else None for ch in PUZZLE[i:i + 9]] for i in range(0, 81, 9)]
    path = tmp_path / "rows.json"
    path.write_text(json.dumps({"id": "rows", "puzzle": rows}))
    assert load_puzzles(str(path))[0]["puzzle"] == PUZZLE.replace(".", "0")


def test_jsonl_skips_malformed_lines(tmp_path):
    path = tmp_path / "batch.jsonl"
    path.write_text(
        json.dumps({"id": "x", "puzzle": PUZZLE}) + "\n"
        + "{not json\n"
        + "\n"
        + json.dumps({"id": "y", "input": PUZZLE, "answer": SOLUTION}) + "\n"
    )
    records = load_puzzles(str(path))
    assert [r["id"] for r in records] == ["x", "y"]
    assert records[1]["solution"] == SOLUTION


def test_json_file_holding_lines_falls_back(tmp_path):
    path = tmp_path / "actually_lines.json"
    path.write_text(json.dumps({"id": "1", "puzzle": PUZZLE}) + "\n" + json.dumps({"id": "2", "puzzle": PUZZLE}))
    assert [r["id"] for r in load_puzzles(str(path))] == ["1", "2"]
