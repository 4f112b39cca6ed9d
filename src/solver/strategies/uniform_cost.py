"""
Uniform-Cost Strategy - Cost-ordered graph search over full-grid states.

Path cost counts each step as 1 and each push as 2, so among solutions the
one returned has the lowest steps + pushes total.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Tuple

from ..base import SearchComponents, SearchOutcome, SolverStrategy
from ..context import SolutionContext
from ..factory import register_strategy
from ..node import SearchNode
from ..solution import SolveStatus
from ..state import GridState

logger = logging.getLogger(__name__)


@register_strategy
class UniformCostStrategy(SolverStrategy):
    """
    Uniform-cost search (cost-weighted breadth-first).

    Keeps the best known cost per state. A state is queued again only when
    a cheaper path to it is found; stale queue entries are skipped on pop.
    Ties are broken by insertion order.
    """
    name = "uniformcost"
    aliases = ("ucs",)
    description = "Uniform-cost (cheapest pushes+steps) - priority by path cost"

    def _search(
        self,
        initial: GridState,
        components: SearchComponents,
        context: SolutionContext
    ) -> SearchOutcome:
        engine = components.engine
        counter = itertools.count()
        queue: List[Tuple[int, int, SearchNode]] = [(0, next(counter), SearchNode.root(initial))]
        best_cost: Dict[GridState, int] = {initial: 0}

        while queue:
            if context.budget_exhausted():
                return self._exhausted(context)

            cost, _, node = heapq.heappop(queue)
            if cost > best_cost.get(node.state, cost):
                continue
            self._expand(context)

            if node.state.is_goal():
                logger.debug(f"[UCS] Goal at cost {node.cost}, {len(best_cost)} states seen")
                return SearchOutcome(
                    status=SolveStatus.SOLVED,
                    moves=node.path(),
                    pushes=node.pushes
                )

            for transition in engine.successors(node.state):
                if self._is_pruned(transition, components, context):
                    continue
                child_cost = cost + transition.cost
                known = best_cost.get(transition.state)
                if known is not None and known <= child_cost:
                    continue
                best_cost[transition.state] = child_cost
                heapq.heappush(queue, (child_cost, next(counter), node.child(transition)))

        logger.debug(f"[UCS] State space exhausted after {len(best_cost)} states")
        return SearchOutcome(status=SolveStatus.NO_SOLUTION)
