"""Top-level solve interface.

Expose `solve_grid(puzzle)` that accepts a grid (list of 9 rows), grid text
compatible with `src.sudoku.grid.parse_grid`, or a puzzle dictionary as
returned by `src.sudoku.loader.load_puzzles`.
"""

from typing import Any, Optional

from src.sudoku import solver_core
from src.sudoku.grid import Grid, copy_grid, parse_grid
from src.utils.trace import Tracer


def solve_grid(puzzle: Any, tracer: Optional[Tracer] = None) -> Optional[Grid]:
    """
    Solve a puzzle and return the completed grid, or None if it has no solution.
    Accepts:
      - Grids (copied; the caller's grid is left untouched)
      - Grid text (parsed via `parse_grid`)
      - Puzzle dictionaries with a "puzzle" entry
    """
    if isinstance(puzzle, list):
        grid = copy_grid(puzzle)
    elif isinstance(puzzle, str):
        grid = parse_grid(puzzle)
    elif isinstance(puzzle, dict):
        grid = parse_grid(puzzle.get("puzzle", ""))
    else:
        raise TypeError("solve_grid expects a grid, grid text, or puzzle dictionary")

    if solver_core.solve(grid, tracer):
        return grid
    return None


__all__ = ["solve_grid"]
