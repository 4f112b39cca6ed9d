"""
Solver API Module - One-call entry point for solving a level.
"""

from typing import Any, Optional

from .cell import GridLike
from .context import DEFAULT_MAX_NODES, SolutionContext
from .factory import create_strategy
from .solution import Solution


def solve(
    strategy_name: str,
    grid: GridLike,
    timeout_sec: Optional[float] = None,
    max_nodes: int = DEFAULT_MAX_NODES,
    seed: Optional[int] = None,
    **strategy_kwargs: Any
) -> Solution:
    """
    Solve a level with the named strategy.

    Args:
        strategy_name: "deepening", "bestfirst", "breadthfirst", "depthfirst"
            or "uniformcost" (aliases: ida, astar, bfs, dfs, ucs)
        grid: Level rows, e.g. ["#####", "#.$@#", "#####"]
        timeout_sec: Wall-clock limit (default: the strategy's own)
        max_nodes: Node-expansion limit
        seed: Seed for per-call hash tables (deepening strategy)
        **strategy_kwargs: Passed to the strategy constructor
            (e.g. max_rounds, prune_deadlocks)

    Returns:
        Solution; check solution.status or solution.is_solved

    Raises:
        ValueError: If the strategy name is unknown
        InvalidGridError: If the grid cannot describe a playable level

    Example:
        solution = solve("breadthfirst", ["#####", "#.$@#", "#####"])
        solution.as_result()  # {"moves": ["LEFT"]}
    """
    strategy = create_strategy(strategy_name, **strategy_kwargs)
    context = SolutionContext(
        grid=grid,
        timeout_sec=strategy.timeout_sec if timeout_sec is None else timeout_sec,
        max_nodes=max_nodes,
        seed=seed
    )
    return strategy.solve(context)
