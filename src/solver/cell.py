"""
Cell Module - Level character vocabulary and grid parsing.
"""

from enum import Enum
from typing import Sequence, Tuple, Union

from .errors import InvalidGridError


class Cell(Enum):
    """
    Contents of a single grid cell.

    Values are the standard level-file characters, so a grid row can be
    printed by joining cell values.
    """
    WALL = "#"
    FLOOR = " "
    PIECE = "$"
    TARGET = "."
    PIECE_ON_TARGET = "*"
    ACTOR = "@"
    ACTOR_ON_TARGET = "+"

    @property
    def has_piece(self) -> bool:
        return self in (Cell.PIECE, Cell.PIECE_ON_TARGET)

    @property
    def has_actor(self) -> bool:
        return self in (Cell.ACTOR, Cell.ACTOR_ON_TARGET)

    @property
    def is_target(self) -> bool:
        return self in (Cell.TARGET, Cell.PIECE_ON_TARGET, Cell.ACTOR_ON_TARGET)


Position = Tuple[int, int]
Grid = Tuple[Tuple[Cell, ...], ...]
GridLike = Sequence[Union[str, Sequence[Union[str, Cell]]]]

# Alternate floor characters found in published collections
_FLOOR_ALIASES = {"-": Cell.FLOOR, "_": Cell.FLOOR}


def parse_cell(value: Union[str, Cell]) -> Cell:
    """
    Convert a level character (or Cell) to a Cell.

    Args:
        value: Single character or Cell

    Returns:
        Matching Cell

    Raises:
        InvalidGridError: If the character is not part of the vocabulary
    """
    if isinstance(value, Cell):
        return value
    if value in _FLOOR_ALIASES:
        return _FLOOR_ALIASES[value]
    try:
        return Cell(value)
    except ValueError:
        raise InvalidGridError(f"Unknown cell character: {value!r}") from None


def parse_grid(rows: GridLike) -> Grid:
    """
    Build an immutable grid from rows of characters or cells.

    Rows may be strings ("#.$@#") or sequences of single characters / Cell
    values. Shape is not checked here, see board.validate_grid().

    Args:
        rows: Row sequence, top row first

    Returns:
        Tuple-of-tuples grid
    """
    return tuple(tuple(parse_cell(value) for value in row) for row in rows)


def format_grid(grid: Grid) -> Tuple[str, ...]:
    """Render a grid back to level-file rows."""
    return tuple("".join(cell.value for cell in row) for row in grid)
