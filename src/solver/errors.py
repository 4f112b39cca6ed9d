"""
Solver Errors - Exceptions raised for bad input to the solver.

Search outcomes (no solution, budget exhausted) are reported through
SolveStatus on the returned Solution, not through exceptions.
"""


class SolverError(Exception):
    """Base class for solver errors."""


class InvalidGridError(SolverError, ValueError):
    """The supplied grid cannot describe a playable level."""


class IllegalMoveError(SolverError):
    """A move was rejected by the transition engine during playback."""
