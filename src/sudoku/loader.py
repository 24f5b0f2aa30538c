import json
import os
from typing import Any, Dict, List, Optional

import pandas as pd

_PUZZLE_KEYS = ("puzzle", "grid", "quizzes", "board", "input")
_SOLUTION_KEYS = ("solution", "solutions", "answer")


def load_puzzles(file_path: str) -> List[Dict[str, Any]]:
    """
    Reads puzzle grids from a file. Handles .parquet, .csv, .json and .jsonl formats.
    Returns a list of puzzle dictionaries with at least "id" and "puzzle" keys.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    def _is_nonempty_str(value: Any) -> bool:
        return isinstance(value, str) and value.strip() != ""

    def _first_text(record: Dict[str, Any], keys) -> Optional[str]:
        for key in keys:
            value = record.get(key)
            if isinstance(value, list):
                # Nested row lists, e.g. [[5, 3, 0, ...], ...]
                value = "".join(str(v or 0) for row in value for v in row)
            elif isinstance(value, int) and not isinstance(value, bool):
                # CSV readers may coerce an all-digit grid into a number.
                value = str(value)
            if _is_nonempty_str(value):
                return value.strip()
        return None

    def _normalize_record(record: Dict[str, Any], index: int) -> Dict[str, Any]:
        puzzle_text = _first_text(record, _PUZZLE_KEYS)
        if puzzle_text:
            record["puzzle"] = puzzle_text

        solution_text = _first_text(record, _SOLUTION_KEYS)
        if solution_text:
            record["solution"] = solution_text

        if not _is_nonempty_str(record.get("id")):
            raw_id = record.get("id")
            record["id"] = str(raw_id) if raw_id not in (None, "") else f"puzzle-{index}"
        return record

    def _normalize_all(records) -> List[Dict[str, Any]]:
        return [_normalize_record(r, i) for i, r in enumerate(records)]

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 2: CSV File (Kaggle-style quizzes/solutions columns)
    if file_path.endswith(".csv"):
        df = pd.read_csv(file_path, dtype=str, keep_default_na=False)
        return _normalize_all(df.to_dict(orient="records"))

    # Case 3: JSON File (Text; array or object)
    if file_path.endswith(".json"):
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
            if isinstance(payload, list):
                return _normalize_all(p for p in payload if isinstance(p, dict))
            if isinstance(payload, dict):
                return _normalize_all([payload])
            return []
        except json.JSONDecodeError:
            # Some sources use ".json" but actually store JSONL; fall back to line-delimited parsing.
            return _normalize_all(_read_json_lines(file_path))

    # Case 4: JSONL File (Text)
    return _normalize_all(_read_json_lines(file_path))


def _read_json_lines(file_path: str) -> List[Dict[str, Any]]:
    data = []
    with open(file_path, "r", encoding="utf-8") as f:
        for line in f:
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError:
                continue
            if isinstance(obj, dict):
                data.append(obj)
    return data
