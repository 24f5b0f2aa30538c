"""Grid model, backtracking solver, and puzzle generator for 9x9 logic puzzles."""

from .grid import Grid, EMPTY, parse_grid, format_grid, render_grid
from .solver_core import solve, is_placement_legal, check_win, is_consistent
from .generator import Difficulty, PuzzleInstance, generate_puzzle

__all__ = [
    "Grid",
    "EMPTY",
    "parse_grid",
    "format_grid",
    "render_grid",
    "solve",
    "is_placement_legal",
    "check_win",
    "is_consistent",
    "Difficulty",
    "PuzzleInstance",
    "generate_puzzle",
]
