"""
Solver Package - Search engine for box-pushing puzzles.

This package provides five interchangeable search strategies that turn a
level grid into a move sequence pushing every piece onto a target.
Strategies share one transition engine, deadlock check and heuristic, and
are selected by name at runtime.

Public API:
    - Cell, parse_grid(), format_grid(): Level character vocabulary
    - Board: Static walls/targets derived from a grid
    - GridState, CompactState: State representations
    - Move, DIRECTIONS: Actor moves
    - TransitionEngine, Transition: Step/push simulation
    - DeadlockOracle: Corner-deadlock check
    - HeuristicEstimator: Greedy distance estimate
    - Solution, SolutionMetrics, SolveStatus: Results
    - SolutionContext: Budget and cancellation for one call
    - SolverStrategy: Abstract base for strategies
    - create_strategy(), get_strategy_names(), get_strategy_info()
    - solve(): One-call entry point

Usage:
    from src.solver import solve

    solution = solve("breadthfirst", ["#####", "#.$@#", "#####"])
    if solution.is_solved:
        print(" ".join(solution.move_names()))   # LEFT
"""

# Core data structures
from .cell import Cell, Grid, Position, parse_grid, format_grid
from .errors import SolverError, InvalidGridError, IllegalMoveError
from .board import Board, validate_grid
from .move import Move, DIRECTIONS
from .state import GridState, CompactState
from .transition import Transition, TransitionEngine
from .deadlock import DeadlockOracle
from .heuristic import HeuristicEstimator
from .hashing import ZobristHasher
from .node import SearchNode
from .solution import Solution, SolutionMetrics, SolveStatus
from .context import SolutionContext

# Strategy framework
from .base import SolverStrategy, SearchComponents
from .factory import (
    create_strategy,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
    resolve_strategy_name,
)

# Import strategies to register them
from . import strategies

from .api import solve

__all__ = [
    # Data structures
    "Cell",
    "Grid",
    "Position",
    "parse_grid",
    "format_grid",
    "Board",
    "validate_grid",
    "Move",
    "DIRECTIONS",
    "GridState",
    "CompactState",
    "Transition",
    "TransitionEngine",
    "DeadlockOracle",
    "HeuristicEstimator",
    "ZobristHasher",
    "SearchNode",
    "Solution",
    "SolutionMetrics",
    "SolveStatus",
    "SolutionContext",
    # Errors
    "SolverError",
    "InvalidGridError",
    "IllegalMoveError",
    # Strategy framework
    "SolverStrategy",
    "SearchComponents",
    "create_strategy",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
    "resolve_strategy_name",
    "solve",
]
