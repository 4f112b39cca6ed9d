"""
Transition Module - Step and push simulation for both state forms.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Union

from .board import Board
from .cell import Cell, Position
from .move import DIRECTIONS, Move
from .state import CompactState, GridState

State = Union[GridState, CompactState]

STEP_COST = 1
PUSH_COST = 2


@dataclass(frozen=True)
class Transition:
    """
    Result of applying one move to a state.

    Attributes:
        state: State after the move
        move: Move that was applied
        is_push: True if a piece was pushed
        piece_from: Where the pushed piece started (None for a step)
        piece_to: Where the pushed piece ended up (None for a step)
    """
    state: State
    move: Move
    is_push: bool = False
    piece_from: Optional[Position] = None
    piece_to: Optional[Position] = None

    @property
    def cost(self) -> int:
        """Path cost of this move: steps count 1, pushes count 2."""
        return PUSH_COST if self.is_push else STEP_COST


class TransitionEngine:
    """
    Applies moves to states.

    Rules:
        - The actor moves one cell in the move direction.
        - Moving into a wall or off the grid is rejected.
        - Moving into a piece pushes it one further cell; the push is
          rejected if that cell is off the grid, a wall or another piece.

    The input state is never modified; every accepted move produces a new
    state value.
    """

    def __init__(self, board: Board):
        """
        Initialize engine.

        Args:
            board: Static board the states belong to
        """
        self.board = board

    def apply(self, state: State, move: Move) -> Optional[Transition]:
        """
        Apply a move.

        Args:
            state: GridState or CompactState
            move: Direction to move

        Returns:
            Transition, or None if the move is illegal
        """
        if isinstance(state, CompactState):
            return self._apply_compact(state, move)
        return self._apply_grid(state, move)

    def successors(
        self,
        state: State,
        order: Iterable[Move] = DIRECTIONS
    ) -> Iterator[Transition]:
        """
        Yield every legal transition from a state.

        Args:
            state: State to expand
            order: Move order to try

        Yields:
            Transition for each accepted move, in the given order
        """
        for move in order:
            transition = self.apply(state, move)
            if transition is not None:
                yield transition

    def _apply_compact(self, state: CompactState, move: Move) -> Optional[Transition]:
        board = self.board
        actor = move.offset(state.actor)
        if board.is_blocked(actor):
            return None

        if actor not in state.pieces:
            return Transition(
                state=CompactState(actor=actor, pieces=state.pieces),
                move=move
            )

        behind = move.offset(actor)
        if board.is_blocked(behind) or behind in state.pieces:
            return None

        pieces = (state.pieces - {actor}) | {behind}
        return Transition(
            state=CompactState(actor=actor, pieces=pieces),
            move=move,
            is_push=True,
            piece_from=actor,
            piece_to=behind
        )

    def _apply_grid(self, state: GridState, move: Move) -> Optional[Transition]:
        board = self.board
        actor = move.offset(state.actor)
        if board.is_blocked(actor):
            return None

        dest_cell = state.cell_at(actor)
        behind = None

        if dest_cell.has_piece:
            behind = move.offset(actor)
            if board.is_blocked(behind) or state.cell_at(behind).has_piece:
                return None

        # Copy to mutable rows, only the touched rows change
        rows = list(state.grid)
        touched = {state.actor[1], actor[1]}
        if behind is not None:
            touched.add(behind[1])
        mutable = {y: list(rows[y]) for y in touched}

        # Actor leaves its cell, the target marker stays behind
        ox, oy = state.actor
        mutable[oy][ox] = Cell.TARGET if mutable[oy][ox].is_target else Cell.FLOOR

        if behind is not None:
            bx, by = behind
            mutable[by][bx] = Cell.PIECE_ON_TARGET if mutable[by][bx].is_target else Cell.PIECE

        ax, ay = actor
        mutable[ay][ax] = Cell.ACTOR_ON_TARGET if mutable[ay][ax].is_target else Cell.ACTOR

        for y, row in mutable.items():
            rows[y] = tuple(row)

        return Transition(
            state=GridState(grid=tuple(rows), actor=actor),
            move=move,
            is_push=behind is not None,
            piece_from=actor if behind is not None else None,
            piece_to=behind
        )
