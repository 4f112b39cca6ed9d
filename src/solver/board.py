"""
Board Module - Static facts derived once from the initial grid.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet

import numpy as np

from .cell import Cell, Grid, Position
from .errors import InvalidGridError

logger = logging.getLogger(__name__)


def validate_grid(grid: Grid) -> None:
    """
    Check that a parsed grid describes a playable level.

    Args:
        grid: Parsed grid (see cell.parse_grid)

    Raises:
        InvalidGridError: If the grid is empty, not rectangular, has no actor
            or several actors, or has a different number of pieces and targets
    """
    if not grid or not grid[0]:
        raise InvalidGridError("Grid is empty")

    width = len(grid[0])
    for y, row in enumerate(grid):
        if len(row) != width:
            raise InvalidGridError(
                f"Grid is not rectangular: row {y} has {len(row)} cells, expected {width}"
            )

    actors = 0
    pieces = 0
    targets = 0
    for row in grid:
        for cell in row:
            actors += cell.has_actor
            pieces += cell.has_piece
            targets += cell.is_target

    if actors == 0:
        raise InvalidGridError("No actor found in grid")
    if actors > 1:
        raise InvalidGridError(f"Grid has {actors} actors, expected exactly one")
    if pieces != targets:
        raise InvalidGridError(
            f"Grid has {pieces} pieces but {targets} targets"
        )


@dataclass(frozen=True, eq=False)
class Board:
    """
    Immutable static board facts.

    Walls and targets never change while a level is played, so they are
    computed once per solve call and shared by every state.

    Attributes:
        width: Number of columns
        height: Number of rows
        walls: Boolean mask indexed [y, x], True where a wall stands
        targets: Set of (x, y) target positions
    """
    width: int
    height: int
    walls: np.ndarray
    targets: FrozenSet[Position]

    @classmethod
    def from_grid(cls, grid: Grid) -> 'Board':
        """
        Create a Board from a parsed grid.

        Args:
            grid: Parsed grid

        Returns:
            Board instance

        Raises:
            InvalidGridError: If the grid fails validation
        """
        try:
            validate_grid(grid)
        except InvalidGridError as e:
            logger.error(f"Rejected grid: {e}")
            raise

        height = len(grid)
        width = len(grid[0])
        walls = np.array(
            [[cell is Cell.WALL for cell in row] for row in grid],
            dtype=bool
        )
        walls.setflags(write=False)

        targets = frozenset(
            (x, y)
            for y, row in enumerate(grid)
            for x, cell in enumerate(row)
            if cell.is_target
        )

        return cls(width=width, height=height, walls=walls, targets=targets)

    def in_bounds(self, pos: Position) -> bool:
        """Check if a position lies inside the grid."""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, pos: Position) -> bool:
        """Check if a position holds a wall (positions outside are not walls)."""
        x, y = pos
        return self.in_bounds(pos) and bool(self.walls[y, x])

    def is_blocked(self, pos: Position) -> bool:
        """Check if a position is a wall or outside the grid."""
        x, y = pos
        return not self.in_bounds(pos) or bool(self.walls[y, x])

    def is_target(self, pos: Position) -> bool:
        return pos in self.targets

    @property
    def cell_count(self) -> int:
        return self.width * self.height
