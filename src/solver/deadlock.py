"""
Deadlock Module - Static corner-deadlock detection.

A piece that sits off-target with a blocked cell on one vertical side and a
blocked cell on one horizontal side can never be pushed again: pushing along
either axis needs the actor to stand on the opposite side or moves the piece
into the blocked cell. Such cells are precomputed once per board.

The check is incomplete. Frozen groups of pieces, pieces stuck along a wall
with no target on it, and target starvation are not detected.
"""

from typing import Iterable

import numpy as np

from .board import Board
from .cell import Position


class DeadlockOracle:
    """
    Corner-deadlock check backed by a precomputed dead-cell mask.

    Attributes:
        board: Board the mask was computed for
        dead_cells: Boolean mask indexed [y, x], True where a piece would be
            corner-deadlocked
    """

    def __init__(self, board: Board):
        self.board = board
        self.dead_cells = self._compute_dead_cells(board)

    @staticmethod
    def _compute_dead_cells(board: Board) -> np.ndarray:
        """
        Build the dead-cell mask.

        Pads the wall mask with a ring of walls so that the grid edge counts
        as blocked, then combines shifted copies.
        """
        blocked = np.pad(board.walls, 1, mode="constant", constant_values=True)
        up = blocked[:-2, 1:-1]
        down = blocked[2:, 1:-1]
        left = blocked[1:-1, :-2]
        right = blocked[1:-1, 2:]

        corner = (up | down) & (left | right)
        dead = corner & ~board.walls

        for x, y in board.targets:
            dead[y, x] = False

        dead.setflags(write=False)
        return dead

    def is_dead_cell(self, pos: Position) -> bool:
        """Check if a piece on this cell would be corner-deadlocked."""
        x, y = pos
        return bool(self.dead_cells[y, x])

    def is_deadlocked(self, pieces: Iterable[Position]) -> bool:
        """
        Check a piece configuration for corner deadlocks.

        Args:
            pieces: Piece positions

        Returns:
            True if at least one piece is corner-deadlocked
        """
        return any(self.is_dead_cell(pos) for pos in pieces)

    @property
    def dead_cell_count(self) -> int:
        return int(self.dead_cells.sum())
