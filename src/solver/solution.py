"""
Solution Module - Result of strategy computation.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from .move import Move


class SolveStatus(Enum):
    """
    Outcome of a solve call.

    States:
        SOLVED: A move sequence reaching the goal was found
        NO_SOLUTION: The explorable state space was exhausted without a goal
        RESOURCE_EXHAUSTED: Node budget, timeout, cancellation or round cap
            stopped the search before it could decide
    """
    SOLVED = auto()
    NO_SOLUTION = auto()
    RESOURCE_EXHAUSTED = auto()


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of nodes expanded
        pruned_branches: Number of successors pruned as deadlocked
        rounds: Threshold rounds run (deepening strategy only)
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    rounds: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy computation.

    Attributes:
        status: Whether the level was solved, proven unsolvable, or the
            search ran out of budget
        moves: Ordered moves from the initial state to the goal (empty when
            unsolved, or when the level was already solved)
        push_count: Number of moves in `moves` that push a piece
        metrics: Performance statistics
    """
    status: SolveStatus = SolveStatus.NO_SOLUTION
    moves: List[Move] = field(default_factory=list)
    push_count: int = 0
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def is_solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

    @property
    def was_exhausted(self) -> bool:
        return self.status is SolveStatus.RESOURCE_EXHAUSTED

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.moves)

    @property
    def step_count(self) -> int:
        """Number of moves that do not push a piece."""
        return len(self.moves) - self.push_count

    @property
    def cost(self) -> int:
        """Path cost with pushes weighted double."""
        return self.step_count + 2 * self.push_count

    @property
    def has_moves(self) -> bool:
        """Check if solution has any moves."""
        return len(self.moves) > 0

    def get_move(self, index: int) -> Move:
        """
        Get move at specific index.

        Args:
            index: Move index (0-based)

        Returns:
            Move at index

        Raises:
            IndexError: If index out of range
        """
        return self.moves[index]

    def move_names(self) -> List[str]:
        """Moves as their names, e.g. ["LEFT", "UP"]."""
        return [move.name for move in self.moves]

    def as_result(self) -> Optional[Dict[str, Any]]:
        """
        Plain result shape for external callers.

        Returns:
            {"moves": [...]} when solved, None otherwise
        """
        if not self.is_solved:
            return None
        return {"moves": self.move_names()}
