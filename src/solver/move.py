"""
Move Module - The four directions the actor can move in.
"""

from enum import Enum
from typing import Tuple

from .cell import Position


class Move(Enum):
    """
    A single actor move.

    Each value is the (dx, dy) offset applied to the actor position.
    Whether a move is a step or a push depends on the state it is applied
    to, see transition.TransitionEngine.
    """
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def offset(self, pos: Position, distance: int = 1) -> Position:
        """
        Shift a position along this move's direction.

        Args:
            pos: Starting (x, y) position
            distance: Number of cells to shift

        Returns:
            New (x, y) position (may be out of bounds)
        """
        return (pos[0] + self.dx * distance, pos[1] + self.dy * distance)

    def __str__(self) -> str:
        return self.name


# Enumeration order used by every strategy when expanding a state
DIRECTIONS: Tuple[Move, ...] = (Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT)
