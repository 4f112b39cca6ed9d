"""
Solution Manager Module - Playback state machine for a solved level.

This module provides the SolutionManager which computes a solution for one
level, caches it, and plays it back one move at a time through the same
transition engine the strategies use, so every displayed state is exactly
what the search saw.

For the core solving logic, see the src.solver package.
"""

from enum import Enum, auto
from typing import List, Optional
import logging

from src.solver import (
    Board, GridState, IllegalMoveError, Move, Solution, SolutionContext,
    SolverStrategy, TransitionEngine, create_strategy, get_default_strategy_name,
    parse_grid,
)
from src.solver.cell import GridLike
from src.solver.context import DEFAULT_MAX_NODES, DEFAULT_TIMEOUT_SEC

logger = logging.getLogger(__name__)


__all__ = [
    "PlaybackState",
    "SolutionManager",
]


class PlaybackState(Enum):
    """
    State machine states for solution playback.

    States:
        IDLE: No level loaded
        PLAYING: Solution cached, moves remain
        FINISHED: Every move applied, level solved
        FAILED: Strategy returned no solution for the loaded level
    """
    IDLE = auto()
    PLAYING = auto()
    FINISHED = auto()
    FAILED = auto()


class SolutionManager:
    """
    Cached solution playback.

    State Flow:
        IDLE --load()--> PLAYING --advance()...--> FINISHED
                  |
                  +--> FAILED (no solution / budget exhausted)

        reset() returns to the loaded level's first state; load() replaces
        the level.
    """

    def __init__(self, strategy_name: Optional[str] = None,
                 timeout_sec: float = DEFAULT_TIMEOUT_SEC,
                 max_nodes: int = DEFAULT_MAX_NODES,
                 seed: Optional[int] = None,
                 **strategy_kwargs):
        """
        Initialize solution manager.

        Args:
            strategy_name: Name of solving strategy to use (default strategy if None)
            timeout_sec: Time budget for each solve
            max_nodes: Node budget for each solve
            seed: Seed for per-call hash tables
            **strategy_kwargs: Passed to the strategy constructor
        """
        self.timeout_sec = timeout_sec
        self.max_nodes = max_nodes
        self.seed = seed

        # Strategy
        self._strategy: SolverStrategy = create_strategy(
            strategy_name or get_default_strategy_name(), **strategy_kwargs
        )

        # State machine
        self._state = PlaybackState.IDLE

        # Level tracking
        self._engine: Optional[TransitionEngine] = None
        self._initial: Optional[GridState] = None
        self._current: Optional[GridState] = None

        # Cached solution
        self._solution: Optional[Solution] = None
        self._move_index = 0

    @property
    def strategy(self) -> SolverStrategy:
        """Get current solving strategy."""
        return self._strategy

    @property
    def strategy_name(self) -> str:
        """Get current strategy name."""
        return self._strategy.name

    def set_strategy(self, strategy_name: str, **strategy_kwargs) -> None:
        """
        Change the solving strategy.

        Takes effect on the next load().

        Args:
            strategy_name: Name of strategy to use
            **strategy_kwargs: Passed to the strategy constructor
        """
        self._strategy = create_strategy(strategy_name, **strategy_kwargs)
        logger.info(f"Strategy changed to: {self._strategy.name}")

    @property
    def state(self) -> PlaybackState:
        """Get current state machine state."""
        return self._state

    @property
    def solution(self) -> Optional[Solution]:
        """Get cached solution."""
        return self._solution

    @property
    def current_state(self) -> Optional[GridState]:
        """Get the grid state after the moves played so far."""
        return self._current

    @property
    def next_move(self) -> Optional[Move]:
        """Get next move to play, or None if exhausted."""
        if self._solution is None or self._move_index >= len(self._solution.moves):
            return None
        return self._solution.get_move(self._move_index)

    @property
    def moves_played(self) -> int:
        return self._move_index

    @property
    def moves_remaining(self) -> int:
        """Number of moves left in the cached solution."""
        if self._solution is None:
            return 0
        return max(0, len(self._solution.moves) - self._move_index)

    @property
    def total_moves(self) -> int:
        """Total moves in current solution."""
        if self._solution is None:
            return 0
        return self._solution.move_count

    def load(self, grid: GridLike) -> Solution:
        """
        Load a level, solve it, and prepare playback.

        Args:
            grid: Level rows

        Returns:
            The computed solution

        Raises:
            InvalidGridError: If the grid cannot describe a playable level
        """
        parsed = parse_grid(grid)
        board = Board.from_grid(parsed)
        self._engine = TransitionEngine(board)
        self._initial = GridState.from_grid(parsed)
        self._current = self._initial
        self._move_index = 0

        context = SolutionContext(
            grid=parsed,
            timeout_sec=self.timeout_sec,
            max_nodes=self.max_nodes,
            seed=self.seed
        )
        self._solution = self._strategy.solve(context)

        if not self._solution.is_solved:
            logger.warning(f"State[FAILED]: {self._solution.status.name} with '{self.strategy_name}'")
            self._state = PlaybackState.FAILED
        elif self._solution.has_moves:
            logger.info(f"State[PLAYING]: {self._solution.move_count} moves cached")
            self._state = PlaybackState.PLAYING
        else:
            self._state = PlaybackState.FINISHED

        return self._solution

    def advance(self) -> Optional[GridState]:
        """
        Play the next move.

        Returns:
            New current state, or None if no move remains

        Raises:
            IllegalMoveError: If the engine rejects the cached move
        """
        move = self.next_move
        if move is None:
            return None

        transition = self._engine.apply(self._current, move)
        if transition is None:
            raise IllegalMoveError(
                f"Move {self._move_index} ({move.name}) rejected at actor {self._current.actor}"
            )

        self._current = transition.state
        self._move_index += 1
        logger.debug(
            f"State[PLAYING]: move {self._move_index}/{self.total_moves} {move.name}"
            f"{' (push)' if transition.is_push else ''}"
        )

        if self.moves_remaining == 0:
            logger.info("State[FINISHED]: all moves played")
            self._state = PlaybackState.FINISHED

        return self._current

    def play_all(self) -> List[GridState]:
        """
        Play every remaining move.

        Returns:
            States after each move, in order
        """
        states = []
        while self.next_move is not None:
            states.append(self.advance())
        return states

    def peek_next_moves(self, count: int = 3) -> List[Move]:
        """
        Preview upcoming moves without advancing.

        Args:
            count: Number of moves to preview

        Returns:
            List of upcoming moves
        """
        if self._solution is None:
            return []
        return self._solution.moves[self._move_index:self._move_index + count]

    def reset(self) -> None:
        """Rewind playback to the loaded level's initial state."""
        if self._initial is None:
            self._state = PlaybackState.IDLE
            return
        self._current = self._initial
        self._move_index = 0
        if self._solution is not None and self._solution.is_solved:
            self._state = PlaybackState.PLAYING if self._solution.has_moves else PlaybackState.FINISHED
        logger.debug(f"Playback reset, state={self._state.name}")
