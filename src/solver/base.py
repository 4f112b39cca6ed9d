"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .board import Board
from .cell import parse_grid
from .context import SolutionContext
from .deadlock import DeadlockOracle
from .errors import InvalidGridError
from .heuristic import HeuristicEstimator
from .move import Move
from .solution import Solution, SolutionMetrics, SolveStatus
from .state import GridState
from .transition import Transition, TransitionEngine

logger = logging.getLogger(__name__)

# How often (in expansions) strategies report progress
PROGRESS_INTERVAL = 10_000


@dataclass
class SearchComponents:
    """
    Per-call collaborators shared by every strategy.

    Built fresh for each solve call from the level's Board and discarded
    when the call returns.

    Attributes:
        board: Static board facts
        engine: Step/push simulation
        oracle: Corner-deadlock check
        estimator: Remaining-cost estimate
    """
    board: Board
    engine: TransitionEngine
    oracle: DeadlockOracle
    estimator: HeuristicEstimator

    @classmethod
    def from_board(cls, board: Board) -> 'SearchComponents':
        return cls(
            board=board,
            engine=TransitionEngine(board),
            oracle=DeadlockOracle(board),
            estimator=HeuristicEstimator(board.targets)
        )


@dataclass
class SearchOutcome:
    """
    What a strategy's search loop reports back to solve().

    Attributes:
        status: Search result
        moves: Moves to the goal when solved
        pushes: Pushes among those moves
        rounds: Threshold rounds run (deepening only)
    """
    status: SolveStatus
    moves: List[Move] = field(default_factory=list)
    pushes: int = 0
    rounds: int = 0


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    solve() validates the grid, builds the shared components, handles the
    already-solved and already-deadlocked starts, and delegates the actual
    traversal to _search(). Subclasses implement _search() and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        aliases: Alternative names accepted by the factory
        description: Human-readable description
        timeout_sec: Default timeout for this strategy
        prune_deadlocks: Discard successors with a corner-deadlocked piece
    """
    name: str = "base"
    aliases: Tuple[str, ...] = ()
    description: str = "Base strategy"
    timeout_sec: float = 20.0
    prune_deadlocks: bool = False

    def __init__(self, prune_deadlocks: Optional[bool] = None):
        """
        Initialize strategy.

        Args:
            prune_deadlocks: Override the class default for deadlock pruning
        """
        if prune_deadlocks is not None:
            self.prune_deadlocks = prune_deadlocks

    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute a solution for the level in the context.

        Args:
            context: Solution context with grid, budget and cancellation

        Returns:
            Solution with status, moves and metrics

        Raises:
            InvalidGridError: If the grid cannot describe a playable level
        """
        start_time = time.perf_counter()

        try:
            grid = parse_grid(context.grid)
        except InvalidGridError as e:
            logger.error(f"[{self.name}] Rejected grid: {e}")
            raise

        board = Board.from_grid(grid)
        components = SearchComponents.from_board(board)
        initial = GridState.from_grid(grid)

        if initial.is_goal():
            logger.info(f"[{self.name}] Level already solved")
            outcome = SearchOutcome(status=SolveStatus.SOLVED)
        elif self.prune_deadlocks and components.oracle.is_deadlocked(initial.piece_set()):
            logger.info(f"[{self.name}] Initial state is deadlocked")
            outcome = SearchOutcome(status=SolveStatus.NO_SOLUTION)
        else:
            outcome = self._search(initial, components, context)

        solution = self._build_solution(outcome, context, start_time)

        logger.info(
            f"[{self.name}] {solution.status.name}: {solution.move_count} moves, "
            f"{solution.push_count} pushes, {context.states_explored} states explored, "
            f"{solution.metrics.computation_time_ms:.1f}ms"
        )
        return solution

    @abstractmethod
    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        """
        Run the strategy's traversal from a non-goal initial state.

        Must check context.budget_exhausted() while expanding and return a
        RESOURCE_EXHAUSTED outcome if it trips.

        Args:
            initial: Starting state (not a goal)
            components: Shared per-call collaborators
            context: Solution context

        Returns:
            SearchOutcome
        """
        pass

    def _expand(self, context: SolutionContext) -> None:
        """Count an expansion and periodically report progress."""
        context.record_expansion()
        if context.states_explored % PROGRESS_INTERVAL == 0:
            context.report_progress(
                min(0.99, context.states_explored / max(1, context.max_nodes)),
                f"{context.states_explored} states explored"
            )

    def _is_pruned(
        self,
        transition: Transition,
        components: SearchComponents,
        context: SolutionContext
    ) -> bool:
        """
        Check whether a successor should be discarded.

        Only pushes can create a deadlock, and only the pushed piece can be
        newly deadlocked, so steps are never pruned.

        Args:
            transition: Candidate successor
            components: Shared per-call collaborators
            context: Solution context (prune counter)

        Returns:
            True if the successor is pruned
        """
        if not self.prune_deadlocks or not transition.is_push:
            return False
        if components.oracle.is_dead_cell(transition.piece_to):
            context.record_prune()
            return True
        return False

    def _exhausted(self, context: SolutionContext, rounds: int = 0) -> SearchOutcome:
        """Outcome for a search stopped by its budget."""
        reason = "cancelled or timed out" if context.is_cancelled() else "node budget reached"
        logger.warning(
            f"[{self.name}] Search stopped ({reason}) after "
            f"{context.states_explored} states, {context.elapsed_time():.2f}s"
        )
        return SearchOutcome(status=SolveStatus.RESOURCE_EXHAUSTED, rounds=rounds)

    def _build_solution(
        self,
        outcome: SearchOutcome,
        context: SolutionContext,
        start_time: float
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return Solution(
            status=outcome.status,
            moves=list(outcome.moves),
            push_count=outcome.pushes,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=context.states_explored,
                pruned_branches=context.pruned_branches,
                rounds=outcome.rounds,
                strategy_name=self.name
            )
        )
