"""
State Module - Full-grid and compact representations of a configuration.

Both representations describe the same thing: where the actor stands and
which cells hold pieces. GridState keeps a complete copy of the grid and is
simple to hash and print; CompactState keeps only positions and is what the
deepening strategy works on.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional, TYPE_CHECKING

from .cell import Cell, Grid, Position
from .errors import InvalidGridError

if TYPE_CHECKING:
    from .board import Board


def find_actor(grid: Grid) -> Optional[Position]:
    """
    Locate the actor in a grid.

    Args:
        grid: Parsed grid

    Returns:
        (x, y) of the first actor cell found, or None
    """
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell.has_actor:
                return (x, y)
    return None


@dataclass(frozen=True)
class GridState:
    """
    Full-grid state.

    Equality and hashing cover the whole grid plus the actor position, so
    two GridState values are the same search state exactly when every cell
    matches.

    Attributes:
        grid: Tuple-of-tuples grid including actor and piece markers
        actor: (x, y) of the actor
    """
    grid: Grid
    actor: Position

    @classmethod
    def from_grid(cls, grid: Grid) -> 'GridState':
        """
        Create a GridState by scanning the grid for the actor.

        Raises:
            InvalidGridError: If the grid contains no actor
        """
        actor = find_actor(grid)
        if actor is None:
            raise InvalidGridError("No actor found in grid")
        return cls(grid=grid, actor=actor)

    @property
    def actor_position(self) -> Position:
        return self.actor

    def piece_set(self) -> FrozenSet[Position]:
        """Scan the grid for piece positions."""
        return frozenset(
            (x, y)
            for y, row in enumerate(self.grid)
            for x, cell in enumerate(row)
            if cell.has_piece
        )

    def is_goal(self) -> bool:
        """True when no piece remains off-target."""
        return not any(Cell.PIECE in row for row in self.grid)

    def cell_at(self, pos: Position) -> Cell:
        x, y = pos
        return self.grid[y][x]

    def to_compact(self) -> 'CompactState':
        return CompactState(actor=self.actor, pieces=self.piece_set())

    def to_rows(self) -> List[str]:
        """Render as level-file rows."""
        return ["".join(cell.value for cell in row) for row in self.grid]


@dataclass(frozen=True)
class CompactState:
    """
    Compact state: actor position plus the set of piece positions.

    Walls and targets live on the Board, so a CompactState is only
    meaningful together with the Board it was derived from.

    Attributes:
        actor: (x, y) of the actor
        pieces: Frozen set of (x, y) piece positions
    """
    actor: Position
    pieces: FrozenSet[Position]

    @classmethod
    def from_grid(cls, grid: Grid) -> 'CompactState':
        return GridState.from_grid(grid).to_compact()

    @property
    def actor_position(self) -> Position:
        return self.actor

    def piece_set(self) -> FrozenSet[Position]:
        return self.pieces

    def is_goal(self, targets: FrozenSet[Position]) -> bool:
        """True when every piece stands on a target."""
        return len(self.pieces) == len(targets) and self.pieces <= targets

    def to_grid_state(self, board: 'Board') -> GridState:
        """
        Rebuild the full-grid form using the board's walls and targets.

        Args:
            board: Board this state belongs to

        Returns:
            Equivalent GridState
        """
        rows = []
        for y in range(board.height):
            row = []
            for x in range(board.width):
                pos = (x, y)
                on_target = pos in board.targets
                if board.walls[y, x]:
                    cell = Cell.WALL
                elif pos in self.pieces:
                    cell = Cell.PIECE_ON_TARGET if on_target else Cell.PIECE
                elif pos == self.actor:
                    cell = Cell.ACTOR_ON_TARGET if on_target else Cell.ACTOR
                else:
                    cell = Cell.TARGET if on_target else Cell.FLOOR
                row.append(cell)
            rows.append(tuple(row))
        return GridState(grid=tuple(rows), actor=self.actor)
