"""
Search tree data structure.

One SearchTree is built per decision and dropped when the decision is made.
Nodes live in a flat list owned by the tree and refer to each other by index:
- parent: index of the parent node (None for the root)
- children: indices of the child nodes, filled in one expansion

Per-node statistics live in side tables indexed the same way:
- visits[i]: times node i was on a backpropagation path
- scores[i]: wins for node i's player, or LOSING_SCORE once the line is
  known to lose
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, TypeVar
import numpy as np


# Score assigned to a node whose move lets the opponent win immediately.
# Later wins through the node still add to it.
LOSING_SCORE = -(2 ** 31)

_INITIAL_CAPACITY = 1024

S = TypeVar('S')


@dataclass
class Node(Generic[S]):
    """
    Structural part of a tree node.

    player is the player whose wins count at this node, i.e. the player
    who made the move that produced state.
    """

    index: int
    state: S
    player: Any
    parent: Optional[int] = None
    children: list[int] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children


class SearchTree(Generic[S]):
    """
    Arena owning every node of one search.

    Args:
        root_state: Position the search starts from
        root_player: Perspective of the root (the player who moved last)
    """

    def __init__(self, root_state: S, root_player: Any):
        self.nodes: list[Node[S]] = []
        self._visits = np.zeros(_INITIAL_CAPACITY, dtype=np.int64)
        self._scores = np.zeros(_INITIAL_CAPACITY, dtype=np.int64)
        self.add_node(root_state, root_player, parent=None)

    @property
    def root(self) -> Node[S]:
        return self.nodes[0]

    @property
    def visits(self) -> np.ndarray:
        """Visit counts, one per node."""
        return self._visits[:len(self.nodes)]

    @property
    def scores(self) -> np.ndarray:
        """Scores, one per node."""
        return self._scores[:len(self.nodes)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node[S]:
        return self.nodes[index]

    def add_node(self, state: S, player: Any, parent: Optional[int]) -> int:
        """Append a node with zeroed statistics and return its index."""
        index = len(self.nodes)
        if index == len(self._visits):
            self._grow()
        self.nodes.append(Node(index=index, state=state, player=player, parent=parent))
        return index

    def add_children(self, parent: int, states: list[S], player: Any) -> list[int]:
        """
        Attach a full sibling set to a childless node.

        Raises:
            ValueError: if the node already has children
        """
        node = self.nodes[parent]
        if node.children:
            raise ValueError(f"Node {parent} is already expanded")
        node.children = [self.add_node(s, player, parent) for s in states]
        return node.children

    def visit_count(self, index: int) -> int:
        return int(self._visits[index])

    def score(self, index: int) -> int:
        return int(self._scores[index])

    def record_visit(self, index: int, won: bool) -> None:
        self._visits[index] += 1
        if won:
            self._scores[index] += 1

    def mark_losing(self, index: int) -> None:
        self._scores[index] = LOSING_SCORE

    def child_visits(self, index: int) -> np.ndarray:
        return self._visits[self.nodes[index].children]

    def child_scores(self, index: int) -> np.ndarray:
        return self._scores[self.nodes[index].children]

    def path_to_root(self, index: int) -> list[int]:
        """Indices from the given node up to and including the root."""
        path = [index]
        parent = self.nodes[index].parent
        while parent is not None:
            path.append(parent)
            parent = self.nodes[parent].parent
        return path

    def depth(self, index: int) -> int:
        return len(self.path_to_root(index)) - 1

    def iter_breadth_first(self) -> Iterator[Node[S]]:
        """Yield nodes level by level starting at the root."""
        candidates = deque([0])
        while candidates:
            node = self.nodes[candidates.popleft()]
            yield node
            candidates.extend(node.children)

    def iter_depth_first(self) -> Iterator[Node[S]]:
        """Yield nodes in pre-order, children left to right."""
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            yield node
            stack.extend(reversed(node.children))

    def breadth_first_search(self, target: S) -> bool:
        """Return True if any node holds a state equal to target."""
        return any(node.state == target for node in self.iter_breadth_first())

    def depth_first_search(self, target: S) -> bool:
        """Same as breadth_first_search, walking depth first."""
        return any(node.state == target for node in self.iter_depth_first())

    def _grow(self) -> None:
        new_size = 2 * len(self._visits)
        self._visits = np.resize(self._visits, new_size)
        self._scores = np.resize(self._scores, new_size)
        self._visits[len(self.nodes):] = 0
        self._scores[len(self.nodes):] = 0

    def __repr__(self) -> str:
        return f"SearchTree(nodes={len(self)}, root_visits={self.visit_count(0)})"
