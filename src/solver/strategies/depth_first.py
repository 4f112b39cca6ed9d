"""
Depth-First Strategy - LIFO graph search over full-grid states.
"""

import logging
from typing import List, Set

from ..base import SearchComponents, SearchOutcome, SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..move import DIRECTIONS
from ..node import SearchNode
from ..solution import SolveStatus
from ..state import GridState

logger = logging.getLogger(__name__)


@register_strategy
class DepthFirstStrategy(SolverStrategy):
    """
    Depth-first search with a global visited set.

    Returns the first solution found, which is usually far from the
    shortest. Successors are pushed in reverse enumeration order
    (LEFT, DOWN, RIGHT, UP), so UP is popped and explored first.
    """
    name = "depthfirst"
    aliases = ("dfs",)
    description = "Depth-first (fast, long paths) - LIFO search, first solution wins"

    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        engine = components.engine
        stack: List[SearchNode] = [SearchNode.root(initial)]
        visited: Set[GridState] = {initial}
        order = tuple(reversed(DIRECTIONS))

        while stack:
            if context.budget_exhausted():
                return self._exhausted(context)

            node = stack.pop()
            self._expand(context)

            if node.state.is_goal():
                logger.debug(f"[DFS] Goal at depth {node.steps}, {len(visited)} states seen")
                return SearchOutcome(
                    status=SolveStatus.SOLVED,
                    moves=node.path(),
                    pushes=node.pushes
                )

            for transition in engine.successors(node.state, order):
                if self._is_pruned(transition, components, context):
                    continue
                if transition.state in visited:
                    continue
                visited.add(transition.state)
                stack.append(node.child(transition))

        logger.debug(f"[DFS] State space exhausted after {len(visited)} states")
        return SearchOutcome(status=SolveStatus.NO_SOLUTION)
