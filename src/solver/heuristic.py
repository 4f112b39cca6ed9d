"""
Heuristic Module - Greedy piece-to-target distance estimate.
"""

from typing import Dict, FrozenSet, Iterable

import numpy as np

from .cell import Position


class HeuristicEstimator:
    """
    Estimates remaining cost as a greedy piece/target matching.

    Repeatedly takes the closest (piece, target) pair by Manhattan distance
    among the unmatched ones, adds the distance and removes both. Matching
    over the whole board rather than piece by piece keeps the value
    independent of piece enumeration order. The greedy matching can exceed
    the optimal matching, so the estimate is not an admissible lower bound;
    strategies that order or prune by it are not guaranteed to return
    shortest solutions.

    Estimates are memoised per piece set. An estimator belongs to a single
    solve call and is discarded with it.
    """

    def __init__(self, targets: Iterable[Position]):
        """
        Initialize estimator.

        Args:
            targets: Target positions of the board
        """
        self._targets = np.array(sorted(targets), dtype=np.int64).reshape(-1, 2)
        self._cache: Dict[FrozenSet[Position], int] = {}

    def estimate(self, pieces: FrozenSet[Position]) -> int:
        """
        Estimate the cost to bring every piece onto a target.

        Args:
            pieces: Current piece positions

        Returns:
            Sum of greedy matching distances (0 when nothing to match)
        """
        cached = self._cache.get(pieces)
        if cached is not None:
            return cached

        value = self._greedy_matching(pieces)
        self._cache[pieces] = value
        return value

    def _greedy_matching(self, pieces: FrozenSet[Position]) -> int:
        if not pieces or len(self._targets) == 0:
            return 0

        # Sorted so ties resolve the same way on every run
        piece_array = np.array(sorted(pieces), dtype=np.int64)
        distances = np.abs(
            piece_array[:, None, :] - self._targets[None, :, :]
        ).sum(axis=2)

        unmatched = np.iinfo(np.int64).max
        total = 0
        for _ in range(min(len(piece_array), len(self._targets))):
            i, j = np.unravel_index(np.argmin(distances), distances.shape)
            total += int(distances[i, j])
            distances[i, :] = unmatched
            distances[:, j] = unmatched

        return total

    @property
    def cache_size(self) -> int:
        return len(self._cache)
