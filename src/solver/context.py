"""
Solution Context Module - Shared context for strategy execution.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .cell import GridLike

DEFAULT_TIMEOUT_SEC = 20.0
DEFAULT_MAX_NODES = 500_000


@dataclass
class SolutionContext:
    """
    Shared context passed to strategies containing the level grid,
    resource budget, cancellation, and progress reporting.

    One context belongs to one solve call. Counters are updated by the
    running strategy and copied into the solution metrics.

    Attributes:
        grid: Level grid to solve (rows of characters or cells)
        cancel_flag: Threading event for cancellation
        timeout_sec: Maximum computation time in seconds
        max_nodes: Maximum number of node expansions
        seed: Optional seed for per-call hash tables
        start_time: When computation started
        progress_callback: Optional callback for progress updates
        states_explored: Nodes expanded so far
        pruned_branches: Successors discarded by deadlock pruning
    """
    grid: GridLike
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    max_nodes: int = DEFAULT_MAX_NODES
    seed: Optional[int] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[float, str], None]] = None
    states_explored: int = 0
    pruned_branches: int = 0

    def is_cancelled(self) -> bool:
        """
        Check if cancellation requested or timeout exceeded.

        Returns:
            True if strategy should stop execution
        """
        if self.cancel_flag.is_set():
            return True
        return self.remaining_time() < 0

    def budget_exhausted(self) -> bool:
        """
        Check every resource limit.

        Returns:
            True if cancelled, timed out, or the node budget is used up
        """
        if self.states_explored >= self.max_nodes:
            return True
        return self.is_cancelled()

    def record_expansion(self) -> None:
        """Count one expanded node."""
        self.states_explored += 1

    def record_prune(self) -> None:
        """Count one pruned successor."""
        self.pruned_branches += 1

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to the caller.

        Args:
            percent: Progress from 0.0 to 1.0 (fraction of node budget)
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)

    def elapsed_time(self) -> float:
        """
        Get seconds elapsed since computation started.

        Returns:
            Elapsed time in seconds
        """
        return time.time() - self.start_time

    def remaining_time(self) -> float:
        """
        Get seconds remaining before timeout.

        Returns:
            Remaining time in seconds (may be negative if exceeded)
        """
        return self.timeout_sec - self.elapsed_time()
