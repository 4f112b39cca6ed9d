"""
Search Node Module - Path bookkeeping for the graph-search strategies.
"""

from dataclasses import dataclass
from typing import List, Optional

from .move import Move
from .state import GridState
from .transition import Transition


@dataclass(frozen=True, eq=False)
class SearchNode:
    """
    Node in a graph search.

    Holds a back-reference to its parent instead of a copy of the whole
    path; the move list is rebuilt only for the goal node.

    Attributes:
        state: State reached
        parent: Node this one was expanded from (None for the root)
        move: Move taken from the parent (None for the root)
        steps: Moves taken so far
        pushes: Pushes among those moves
        cost: Accumulated path cost (steps 1, pushes 2)
    """
    state: GridState
    parent: Optional['SearchNode'] = None
    move: Optional[Move] = None
    steps: int = 0
    pushes: int = 0
    cost: int = 0

    @classmethod
    def root(cls, state: GridState) -> 'SearchNode':
        return cls(state=state)

    def child(self, transition: Transition) -> 'SearchNode':
        """
        Create the node reached by a transition.

        Args:
            transition: Transition applied to this node's state

        Returns:
            New SearchNode
        """
        return SearchNode(
            state=transition.state,
            parent=self,
            move=transition.move,
            steps=self.steps + 1,
            pushes=self.pushes + int(transition.is_push),
            cost=self.cost + transition.cost
        )

    def path(self) -> List[Move]:
        """Moves from the root to this node."""
        moves = []
        node = self
        while node.parent is not None:
            moves.append(node.move)
            node = node.parent
        moves.reverse()
        return moves
