"""
Best-First Strategy - Heuristic-ordered graph search over full-grid states.

Orders the open list by f = g + h, where g is the path cost (steps 1,
pushes 2) and h is the greedy matching estimate. Because the estimate is
not admissible the returned solution is usually short but not guaranteed
to be the cheapest.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Set, Tuple

from ..base import SearchComponents, SearchOutcome, SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..node import SearchNode
from ..solution import SolveStatus
from ..state import GridState

logger = logging.getLogger(__name__)


@register_strategy
class BestFirstStrategy(SolverStrategy):
    """
    Best-first search with open and closed bookkeeping.

    Algorithm:
        1. Pop the open entry with the lowest f (ties: lower h, then FIFO)
        2. Skip it if a cheaper path to its state was recorded since
        3. Stop if it is a goal, otherwise close it and expand
        4. Queue successors whose g improves on every known path; a closed
           state reached more cheaply is reopened

    Successors that push a piece into a dead corner are pruned.
    """
    name = "bestfirst"
    aliases = ("astar",)
    description = "Best-first (balanced) - priority by cost + distance estimate"
    prune_deadlocks = True

    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        engine = components.engine
        estimator = components.estimator
        counter = itertools.count()

        h0 = estimator.estimate(initial.piece_set())
        open_heap: List[Tuple[int, int, int, SearchNode]] = [
            (h0, h0, next(counter), SearchNode.root(initial))
        ]
        best_g: Dict[GridState, int] = {initial: 0}
        closed: Set[GridState] = set()
        reopened = 0

        while open_heap:
            if context.budget_exhausted():
                return self._exhausted(context)

            _, _, _, node = heapq.heappop(open_heap)
            if node.cost > best_g[node.state] or node.state in closed:
                continue
            self._expand(context)

            if node.state.is_goal():
                logger.debug(
                    f"[BestFirst] Goal at cost {node.cost}, {len(closed)} closed, "
                    f"{reopened} reopened"
                )
                return SearchOutcome(
                    status=SolveStatus.SOLVED,
                    moves=node.path(),
                    pushes=node.pushes
                )

            closed.add(node.state)

            for transition in engine.successors(node.state):
                if self._is_pruned(transition, components, context):
                    continue

                g = node.cost + transition.cost
                known = best_g.get(transition.state)
                if known is not None and known <= g:
                    continue

                if transition.state in closed:
                    closed.discard(transition.state)
                    reopened += 1

                best_g[transition.state] = g
                h = estimator.estimate(transition.state.piece_set())
                heapq.heappush(open_heap, (g + h, h, next(counter), node.child(transition)))

        logger.debug(f"[BestFirst] Open list empty after {len(closed)} closed states")
        return SearchOutcome(status=SolveStatus.NO_SOLUTION)
