"""
Hashing Module - Zobrist-style canonical hashing for compact states.

Each cell gets one random weight for "actor here" and one for "piece here".
A state's hash is the XOR of the weights of its occupied cells, so piece
enumeration order never matters and a move updates the hash in O(1).
"""

from typing import Optional

import numpy as np

from .board import Board
from .state import CompactState
from .transition import Transition


class ZobristHasher:
    """
    Per-call table of random cell weights.

    Tables are generated when the hasher is created. Create one per solve
    call; never share one between concurrent calls.

    Attributes:
        actor_weights: int64 array [y, x] of actor weights
        piece_weights: int64 array [y, x] of piece weights
    """

    def __init__(self, board: Board, seed: Optional[int] = None):
        """
        Initialize weight tables.

        Args:
            board: Board whose cells need weights
            seed: Optional RNG seed for reproducible hashes
        """
        rng = np.random.default_rng(seed)
        shape = (board.height, board.width)
        high = np.iinfo(np.int64).max
        self.actor_weights = rng.integers(0, high, size=shape, dtype=np.int64)
        self.piece_weights = rng.integers(0, high, size=shape, dtype=np.int64)

    def hash_state(self, state: CompactState) -> int:
        """
        Compute a state's hash from scratch.

        Args:
            state: Compact state

        Returns:
            XOR of actor weight and all piece weights
        """
        x, y = state.actor
        value = int(self.actor_weights[y, x])
        for px, py in state.pieces:
            value ^= int(self.piece_weights[py, px])
        return value

    def update(self, value: int, previous: CompactState, transition: Transition) -> int:
        """
        Derive a successor's hash from its parent's hash.

        Args:
            value: Hash of the previous state
            previous: State the transition was applied to
            transition: Transition that produced the successor

        Returns:
            Hash of transition.state
        """
        ox, oy = previous.actor
        nx, ny = transition.state.actor
        value ^= int(self.actor_weights[oy, ox]) ^ int(self.actor_weights[ny, nx])

        if transition.is_push:
            fx, fy = transition.piece_from
            tx, ty = transition.piece_to
            value ^= int(self.piece_weights[fy, fx]) ^ int(self.piece_weights[ty, tx])

        return value
