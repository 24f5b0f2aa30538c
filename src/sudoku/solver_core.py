"""Backtracking grid solver and the legality checks it shares with live play."""

from typing import List, Optional

from .grid import (
    CELL_COUNT,
    DIGITS,
    EMPTY,
    PEERS,
    Cell,
    Grid,
    filled_cells,
    filled_count,
    find_empty,
    validate_grid,
    validate_placement,
    validate_shape,
)
from src.utils.trace import Tracer


def is_placement_legal(grid: Grid, row: int, col: int, digit: int) -> bool:
    """
    Return False iff `digit` already sits in another cell of the row, column
    or box of (row, col). The cell itself is never compared, so a filled cell
    can be re-checked against its own value.
    """
    validate_shape(grid)
    validate_placement(row, col, digit)
    return _is_legal(grid, row, col, digit)


def _is_legal(grid: Grid, row: int, col: int, digit: int) -> bool:
    for r, c in PEERS[(row, col)]:
        if grid[r][c] == digit:
            return False
    return True


def solve(grid: Grid, tracer: Optional[Tracer] = None) -> bool:
    """
    Complete `grid` in place by depth-first backtracking.
    Returns False when no completion exists; the grid is then left exactly
    as it was on entry.
    """
    validate_grid(grid)
    tracer = tracer or Tracer(enabled=False)

    conflicts = find_conflicts(grid)
    if conflicts:
        for r, c in conflicts:
            tracer.log_conflict(r, c, grid[r][c])
        return False

    return _backtrack(grid, 0, tracer)


def _backtrack(grid: Grid, depth: int, tracer: Tracer) -> bool:
    cell = find_empty(grid)
    if cell is None:
        tracer.log_solution_found(filled=filled_count(grid))
        return True
    # Each level fills one cell, so depth is bounded by CELL_COUNT.
    if depth >= CELL_COUNT:
        return False

    row, col = cell
    for digit in _order_digits():
        if not _is_legal(grid, row, col, digit):
            continue

        grid[row][col] = digit
        tracer.log_place(row, col, digit, depth)
        if _backtrack(grid, depth + 1, tracer):
            return True

        grid[row][col] = EMPTY
        tracer.log_backtrack(row, col, digit, depth)

    tracer.log_dead_end(row, col, depth)
    return False


def _order_digits() -> List[int]:
    # Deterministic ordering for reproducibility.
    return list(DIGITS)


def find_conflicts(grid: Grid) -> List[Cell]:
    """Filled cells whose value also appears in one of their peers."""
    return [
        (r, c)
        for r, c in filled_cells(grid)
        if not _is_legal(grid, r, c, grid[r][c])
    ]


def is_consistent(grid: Grid) -> bool:
    """Check that no row, column or box holds a digit twice; empty cells are allowed."""
    validate_grid(grid)
    return not find_conflicts(grid)


def check_win(grid: Grid) -> bool:
    """True iff every cell is filled and every filled value is legal against its peers."""
    validate_grid(grid)
    for r, row in enumerate(grid):
        for c, value in enumerate(row):
            if value == EMPTY:
                return False
            if not _is_legal(grid, r, c, value):
                return False
    return True
