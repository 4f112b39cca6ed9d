"""
Deepening Strategy - Iterative-deepening best-first search on compact states.

Runs repeated depth-first searches bounded by a cost threshold on
f = g + h. The first threshold is the estimate of the initial state; each
following round uses the smallest f that exceeded the previous threshold.
Memory stays proportional to the current path: duplicate detection only
covers states on that path, tracked as Zobrist hashes pushed on entry and
popped on backtrack.

The number of rounds is capped. Hitting the cap reports RESOURCE_EXHAUSTED,
not NO_SOLUTION, since a solution may lie beyond the last threshold.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Set

from ..base import SearchComponents, SearchOutcome, SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..hashing import ZobristHasher
from ..solution import SolveStatus
from ..state import CompactState, GridState
from ..transition import Transition

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One entry of the explicit depth-first stack."""
    state: CompactState
    hash_value: int
    g: int
    successors: Iterator[Transition]


@dataclass
class _RoundResult:
    """
    Result of one threshold-bounded search.

    Attributes:
        path: Transitions from the root to a goal, if one was found
        next_threshold: Smallest f above the threshold (inf if none)
        exhausted: True if the resource budget stopped the round
    """
    path: Optional[List[Transition]] = None
    next_threshold: float = math.inf
    exhausted: bool = False


@register_strategy
class DeepeningStrategy(SolverStrategy):
    """
    Iterative-deepening best-first search.

    Parameters:
        max_rounds: Threshold escalations before giving up (default 50)
        prune_deadlocks: Skip pushes into dead corners (default True)

    Performance:
        - Memory is O(solution length)
        - States are re-expanded every round and may be reached again via
          different paths within a round; long walking detours are costly
    """
    name = "deepening"
    aliases = ("ida",)
    description = "Deepening (low memory) - threshold-bounded depth-first rounds"
    prune_deadlocks = True
    max_rounds = 50

    def __init__(self, max_rounds: Optional[int] = None,
                 prune_deadlocks: Optional[bool] = None):
        """
        Initialize deepening strategy.

        Args:
            max_rounds: Override the round cap
            prune_deadlocks: Override deadlock pruning
        """
        super().__init__(prune_deadlocks=prune_deadlocks)
        if max_rounds is not None:
            self.max_rounds = max_rounds

    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        root = initial.to_compact()
        hasher = ZobristHasher(components.board, seed=context.seed)
        threshold = components.estimator.estimate(root.pieces)

        for round_index in range(1, self.max_rounds + 1):
            logger.debug(f"[Deepening] Round {round_index}: threshold {threshold}")
            result = self._bounded_search(root, threshold, components, hasher, context)

            if result.exhausted:
                return self._exhausted(context, rounds=round_index)

            if result.path is not None:
                return SearchOutcome(
                    status=SolveStatus.SOLVED,
                    moves=[t.move for t in result.path],
                    pushes=sum(1 for t in result.path if t.is_push),
                    rounds=round_index
                )

            if math.isinf(result.next_threshold):
                logger.debug(f"[Deepening] No f above threshold {threshold}, search space exhausted")
                return SearchOutcome(status=SolveStatus.NO_SOLUTION, rounds=round_index)

            threshold = int(result.next_threshold)

        logger.warning(
            f"[Deepening] Round cap {self.max_rounds} reached at threshold {threshold}"
        )
        return SearchOutcome(status=SolveStatus.RESOURCE_EXHAUSTED, rounds=self.max_rounds)

    def _bounded_search(
        self,
        root: CompactState,
        threshold: int,
        components: SearchComponents,
        hasher: ZobristHasher,
        context: SolutionContext
    ) -> _RoundResult:
        """
        Depth-first search that never expands a node with f > threshold.

        Args:
            root: Initial compact state (not a goal)
            threshold: Current f bound
            components: Shared per-call collaborators
            hasher: Per-call Zobrist tables
            context: Solution context for budget checks

        Returns:
            _RoundResult for this round
        """
        engine = components.engine
        estimator = components.estimator
        targets = components.board.targets
        result = _RoundResult()

        root_hash = hasher.hash_state(root)
        on_path: Set[int] = {root_hash}
        path: List[Transition] = []
        stack = [_Frame(root, root_hash, 0, engine.successors(root))]
        self._expand(context)

        while stack:
            frame = stack[-1]
            transition = next(frame.successors, None)

            if transition is None:
                # Backtrack
                stack.pop()
                on_path.discard(frame.hash_value)
                if path:
                    path.pop()
                continue

            if self._is_pruned(transition, components, context):
                continue

            child = transition.state
            g = frame.g + transition.cost
            f = g + estimator.estimate(child.pieces)
            if f > threshold:
                result.next_threshold = min(result.next_threshold, f)
                continue

            if child.is_goal(targets):
                result.path = path + [transition]
                return result

            child_hash = hasher.update(frame.hash_value, frame.state, transition)
            if child_hash in on_path:
                continue

            if context.budget_exhausted():
                result.exhausted = True
                return result

            on_path.add(child_hash)
            path.append(transition)
            stack.append(_Frame(child, child_hash, g, engine.successors(child)))
            self._expand(context)

        return result
