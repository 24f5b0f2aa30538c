import pytest

from src.sudoku.grid import (
    EMPTY,
    PEERS,
    copy_grid,
    empty_grid,
    filled_count,
    find_empty,
    format_grid,
    is_subset,
    parse_grid,
    render_grid,
    validate_grid,
)

LINE = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"


def test_every_cell_has_twenty_peers():
    assert len(PEERS) == 81
    for (row, col), peers in PEERS.items():
        assert len(peers) == 20
        assert (row, col) not in peers


def test_peers_cover_row_column_and_box():
    peers = set(PEERS[(4, 4)])
    assert (4, 0) in peers and (4, 8) in peers
    assert (0, 4) in peers and (8, 4) in peers
    assert (3, 3) in peers and (5, 5) in peers
    assert (0, 0) not in peers


def test_copy_grid_does_not_alias():
    grid = empty_grid()
    clone = copy_grid(grid)
    clone[0][0] = 9
    assert grid[0][0] == EMPTY


def test_parse_one_line_and_boxed_layouts_agree():
    boxed = """
    +-------+-------+-------+
    | 5 3 . | . 7 . | . . . |
    | 6 . . | 1 9 5 | . . . |
    | . 9 8 | . . . | . 6 . |
    +-------+-------+-------+
    | 8 . . | . 6 . | . . 3 |
    | 4 . . | 8 . 3 | . . 1 |
    | 7 . . | . 2 . | . . 6 |
    +-------+-------+-------+
    | . 6 . | . . . | 2 8 . |
    | . . . | 4 1 9 | . . 5 |
    | . . . | . 8 . | . 7 9 |
    +-------+-------+-------+
    """
    assert parse_grid(boxed) == parse_grid(LINE)
    assert parse_grid(LINE.replace(".", "0")) == parse_grid(LINE)


def test_render_grid_parses_back():
    grid = parse_grid(LINE)
    assert parse_grid(render_grid(grid)) == grid


def test_format_grid():
    grid = parse_grid(LINE)
    assert format_grid(grid) == LINE
    assert format_grid(grid, empty="0") == LINE.replace(".", "0")


@pytest.mark.parametrize("text", [LINE[:-1], LINE + "1", LINE[:-1] + "x"])
def test_parse_grid_rejects_bad_text(text):
    with pytest.raises(ValueError):
        parse_grid(text)


def test_find_empty_is_row_major():
    grid = parse_grid(LINE)
    assert find_empty(grid) == (0, 2)
    assert find_empty([[1] * 9 for _ in range(9)]) is None


def test_filled_count_and_subset():
    puzzle = parse_grid(LINE)
    assert filled_count(puzzle) == 30
    other = copy_grid(puzzle)
    other[0][0] = 1
    assert is_subset(empty_grid(), puzzle)
    assert not is_subset(other, puzzle)


@pytest.mark.parametrize(
    "grid",
    [
        [[0] * 9] * 8,
        [[0] * 8 for _ in range(9)],
        [[0] * 9 for _ in range(8)] + [[None] * 9],
        [[0] * 9 for _ in range(8)] + [[10] + [0] * 8],
        [[0] * 9 for _ in range(8)] + [[True] + [0] * 8],
        "not a grid",
    ],
)
def test_validate_grid_rejects_malformed(grid):
    with pytest.raises(ValueError):
        validate_grid(grid)
