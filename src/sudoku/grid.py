"""Grid data structures and helpers for 9x9 puzzles."""

from typing import Dict, Iterable, List, Optional, Tuple

Grid = List[List[int]]
Cell = Tuple[int, int]

SIZE = 9
BOX = 3
CELL_COUNT = SIZE * SIZE
EMPTY = 0
DIGITS = range(1, SIZE + 1)

_EMPTY_MARKERS = {"0", ".", "_"}
_SEPARATORS = {"|", "+", "-"}


def _build_peers() -> Dict[Cell, Tuple[Cell, ...]]:
    peers: Dict[Cell, Tuple[Cell, ...]] = {}
    for row in range(SIZE):
        for col in range(SIZE):
            related = set()
            for i in range(SIZE):
                related.add((row, i))
                related.add((i, col))
            top, left = box_origin(row, col)
            for r in range(top, top + BOX):
                for c in range(left, left + BOX):
                    related.add((r, c))
            related.discard((row, col))
            peers[(row, col)] = tuple(sorted(related))
    return peers


def box_origin(row: int, col: int) -> Cell:
    return row - row % BOX, col - col % BOX


# Each cell maps to the 20 other cells sharing its row, column or box.
PEERS: Dict[Cell, Tuple[Cell, ...]] = _build_peers()


def empty_grid() -> Grid:
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def copy_grid(grid: Grid) -> Grid:
    return [list(row) for row in grid]


def validate_grid(grid: Grid) -> None:
    """Raise ValueError unless `grid` is a 9x9 matrix of ints in 0..9."""
    if not isinstance(grid, list) or len(grid) != SIZE:
        raise ValueError(f"Grid must have exactly {SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, list) or len(row) != SIZE:
            raise ValueError(f"Row {r} must have exactly {SIZE} cells")
        for c, value in enumerate(row):
            if isinstance(value, bool) or not isinstance(value, int) or not EMPTY <= value <= SIZE:
                raise ValueError(f"Cell ({r}, {c}) holds invalid value {value!r}")


def validate_shape(grid: Grid) -> None:
    """Cheap 9x9 shape check for hot paths that skip per-cell validation."""
    if not isinstance(grid, list) or len(grid) != SIZE or any(len(row) != SIZE for row in grid):
        raise ValueError(f"Grid must be {SIZE}x{SIZE}")


def validate_placement(row: int, col: int, digit: Optional[int] = None) -> None:
    if not 0 <= row < SIZE or not 0 <= col < SIZE:
        raise ValueError(f"Cell ({row}, {col}) is outside the grid")
    if digit is not None and digit not in DIGITS:
        raise ValueError(f"Digit must be in 1..{SIZE}, got {digit!r}")


def find_empty(grid: Grid) -> Optional[Cell]:
    """First empty cell in row-major order, or None when the grid is full."""
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] == EMPTY:
                return r, c
    return None


def filled_count(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value != EMPTY)


def filled_cells(grid: Grid) -> Iterable[Cell]:
    for r in range(SIZE):
        for c in range(SIZE):
            if grid[r][c] != EMPTY:
                yield r, c


def is_subset(puzzle: Grid, solution: Grid) -> bool:
    """True when every filled cell of `puzzle` matches `solution`."""
    return all(puzzle[r][c] == solution[r][c] for r, c in filled_cells(puzzle))


def parse_grid(text: str) -> Grid:
    """
    Parse an 81-cell grid from text.
    Digits 1-9 are clues; 0 . _ mark empty cells. Whitespace and the
    box-drawing characters | + - are ignored, so both one-line and boxed layouts work.
    """
    values: List[int] = []
    for ch in str(text):
        if ch.isspace() or ch in _SEPARATORS:
            continue
        if ch in _EMPTY_MARKERS:
            values.append(EMPTY)
        elif ch.isdigit():
            values.append(int(ch))
        else:
            raise ValueError(f"Unexpected character {ch!r} in grid text")
    if len(values) != CELL_COUNT:
        raise ValueError(f"Grid text must describe {CELL_COUNT} cells, got {len(values)}")
    return [values[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def format_grid(grid: Grid, empty: str = ".") -> str:
    return "".join(str(v) if v != EMPTY else empty for row in grid for v in row)


def render_grid(grid: Grid) -> str:
    lines: List[str] = []
    rule = "+-------+-------+-------+"
    for r, row in enumerate(grid):
        if r % BOX == 0:
            lines.append(rule)
        chunks = []
        for start in range(0, SIZE, BOX):
            cells = " ".join(str(v) if v != EMPTY else "." for v in row[start:start + BOX])
            chunks.append(cells)
        lines.append("| " + " | ".join(chunks) + " |")
    lines.append(rule)
    return "\n".join(lines)
