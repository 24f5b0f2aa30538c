"""Puzzle generation: seed, solve, then carve clues out of the answer key."""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Union

from .grid import (
    BOX,
    CELL_COUNT,
    EMPTY,
    SIZE,
    Cell,
    Grid,
    copy_grid,
    empty_grid,
    filled_cells,
    filled_count,
    format_grid,
    is_subset,
    parse_grid,
    validate_grid,
    validate_placement,
)
from .solver_core import check_win, find_conflicts, solve
from src.utils.trace import Tracer


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def clear_budget(self) -> int:
        return CLEAR_BUDGETS[self]

    @classmethod
    def parse(cls, value: Union["Difficulty", str]) -> "Difficulty":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty {value!r}; expected one of: {names}") from None


# Cells cleared from the 81-cell answer key; more clears means a harder puzzle.
CLEAR_BUDGETS: Dict[Difficulty, int] = {
    Difficulty.EASY: 30,
    Difficulty.MEDIUM: 45,
    Difficulty.HARD: 56,
}

DIAGONAL_BOXES = [(0, 0), (3, 3), (6, 6)]


def clear_budget(difficulty: Union[Difficulty, str]) -> int:
    return Difficulty.parse(difficulty).clear_budget


def seed_diagonal_boxes(grid: Grid, rng: random.Random, tracer: Optional[Tracer] = None) -> None:
    """
    Fill the three diagonal boxes with independent permutations of 1-9.
    These boxes share no row, column or box, so no cross-checking is needed
    and the seeded grid always has a completion.
    """
    tracer = tracer or Tracer(enabled=False)
    for top, left in DIAGONAL_BOXES:
        digits = rng.sample(range(1, SIZE + 1), SIZE)
        for i, digit in enumerate(digits):
            grid[top + i // BOX][left + i % BOX] = digit
        tracer.log_seed_box(top, left, digits)


def carve(grid: Grid, budget: int, rng: random.Random, tracer: Optional[Tracer] = None) -> None:
    """Clear `budget` randomly chosen filled cells of `grid` in place."""
    tracer = tracer or Tracer(enabled=False)
    if not 0 <= budget <= CELL_COUNT:
        raise ValueError(f"Clear budget must be in 0..{CELL_COUNT}, got {budget}")
    filled = filled_count(grid)
    if budget > filled:
        raise ValueError(f"Cannot clear {budget} cells from a grid with {filled} filled")

    remaining = budget
    while remaining > 0:
        row = rng.randrange(SIZE)
        col = rng.randrange(SIZE)
        if grid[row][col] == EMPTY:
            continue
        digit = grid[row][col]
        grid[row][col] = EMPTY
        remaining -= 1
        filled -= 1
        tracer.log_clear(row, col, digit, filled)


@dataclass
class PuzzleInstance:
    """
    An answer key plus the puzzle carved from it.
    `solution` never changes; `puzzle` is the player's working copy and
    only its non-clue cells may be edited, and only until it is won.
    """

    difficulty: Difficulty
    solution: Grid
    puzzle: Grid
    initial: Grid = field(default=None, repr=False)  # type: ignore[assignment]
    clues: FrozenSet[Cell] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.difficulty = Difficulty.parse(self.difficulty)
        validate_grid(self.solution)
        if not check_win(self.solution):
            raise ValueError("Solution must be a completed, legal grid")
        validate_grid(self.puzzle)
        if self.initial is None:
            self.initial = copy_grid(self.puzzle)
        validate_grid(self.initial)
        if not is_subset(self.initial, self.solution):
            raise ValueError("Puzzle clues must match the solution")
        self.clues = frozenset(filled_cells(self.initial))
        for r, c in self.clues:
            if self.puzzle[r][c] != self.initial[r][c]:
                raise ValueError(f"Clue at ({r}, {c}) was modified")

    @property
    def clue_count(self) -> int:
        return len(self.clues)

    def is_clue(self, row: int, col: int) -> bool:
        validate_placement(row, col)
        return (row, col) in self.clues

    def place(self, row: int, col: int, digit: int) -> bool:
        """Write `digit` into an editable cell; returns whether the puzzle is now won."""
        validate_placement(row, col, digit)
        self._require_editable(row, col)
        self.puzzle[row][col] = digit
        return check_win(self.puzzle)

    def erase(self, row: int, col: int) -> None:
        validate_placement(row, col)
        self._require_editable(row, col)
        self.puzzle[row][col] = EMPTY

    def reset(self) -> None:
        self.puzzle = copy_grid(self.initial)

    def is_won(self) -> bool:
        return check_win(self.puzzle)

    def conflicts(self) -> List[Cell]:
        return find_conflicts(self.puzzle)

    def _require_editable(self, row: int, col: int) -> None:
        if self.is_won():
            raise ValueError("Puzzle is already solved; reset it to play again")
        if (row, col) in self.clues:
            raise ValueError(f"Cell ({row}, {col}) is a clue and cannot be changed")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "difficulty": self.difficulty.value,
            "puzzle": format_grid(self.puzzle),
            "initial": format_grid(self.initial),
            "solution": format_grid(self.solution),
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "PuzzleInstance":
        initial_text = payload.get("initial")
        if not initial_text:
            # Without the carved grid, player entries would be mistaken for clues.
            raise ValueError("Payload must include the carved 'initial' grid")
        return cls(
            difficulty=payload.get("difficulty", Difficulty.MEDIUM),
            solution=parse_grid(payload["solution"]),
            puzzle=parse_grid(payload["puzzle"]),
            initial=parse_grid(initial_text),
        )


def generate_puzzle(
    difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
    rng: Optional[random.Random] = None,
    tracer: Optional[Tracer] = None,
) -> PuzzleInstance:
    """
    Build a fresh answer key and carve a puzzle for `difficulty`.
    The puzzle is guaranteed to have at least one solution (the answer key);
    uniqueness is not checked.
    """
    level = Difficulty.parse(difficulty)
    rng = rng or random.Random()
    tracer = tracer or Tracer(enabled=False)

    solution = empty_grid()
    seed_diagonal_boxes(solution, rng, tracer)
    if not solve(solution, tracer):
        # Diagonal seeding always leaves a completable grid.
        raise RuntimeError("Seeded grid could not be completed")

    puzzle = copy_grid(solution)
    carve(puzzle, level.clear_budget, rng, tracer)
    return PuzzleInstance(difficulty=level, solution=solution, puzzle=puzzle)
