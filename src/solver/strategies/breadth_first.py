"""
Breadth-First Strategy - FIFO graph search over full-grid states.

Every move costs the same, so the first goal taken off the queue is reached
with the fewest moves among all solutions.
"""

import logging
from collections import deque
from typing import Deque, Set

from ..base import SearchComponents, SearchOutcome, SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..node import SearchNode
from ..solution import SolveStatus
from ..state import GridState

logger = logging.getLogger(__name__)


@register_strategy
class BreadthFirstStrategy(SolverStrategy):
    """
    Breadth-first search with a global visited set.

    States are marked visited when they are queued, so each state is queued
    at most once.
    """
    name = "breadthfirst"
    aliases = ("bfs",)
    description = "Breadth-first (fewest moves) - FIFO search over all states"

    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        engine = components.engine
        queue: Deque[SearchNode] = deque([SearchNode.root(initial)])
        visited: Set[GridState] = {initial}

        while queue:
            if context.budget_exhausted():
                return self._exhausted(context)

            node = queue.popleft()
            self._expand(context)

            if node.state.is_goal():
                logger.debug(f"[BFS] Goal at depth {node.steps}, {len(visited)} states seen")
                return SearchOutcome(
                    status=SolveStatus.SOLVED,
                    moves=node.path(),
                    pushes=node.pushes
                )

            for transition in engine.successors(node.state):
                if self._is_pruned(transition, components, context):
                    continue
                if transition.state in visited:
                    continue
                visited.add(transition.state)
                queue.append(node.child(transition))

        logger.debug(f"[BFS] State space exhausted after {len(visited)} states")
        return SearchOutcome(status=SolveStatus.NO_SOLUTION)
