"""
MCTS search implementation with UCT.

UCT selection formula, for a child with n visits and score w under a parent
with N visits:
U = w / n + c * sqrt(ln(N) / n)      (U = +inf when n == 0)

Each iteration:
1. Select: descend by maximum UCT until reaching a node without children
2. Expand: attach every legal successor of that node in one batch
3. Simulate: play random moves from one new child (or the node itself)
   until the game ends
4. Backup: add a visit to every node on the way back to the root, and a
   point to every node whose player won
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import numpy as np

from .node import SearchTree
from .time_manager import TimeManager
from ..games.base import GameContractError, GameState, Status, random_index


logger = logging.getLogger(__name__)

EXPLORATION = math.sqrt(2)
DEFAULT_ITERATIONS = 10_000

S = TypeVar('S', bound=GameState)


def uct_value(
    total_visit: int,
    win_score: float,
    node_visit: int,
    exploration: float = EXPLORATION,
) -> float:
    """UCT score of one child. Unvisited children score +inf."""
    if node_visit == 0:
        return math.inf
    return (win_score / node_visit) + exploration * math.sqrt(
        math.log(max(total_visit, 1)) / node_visit
    )


def uct_scores(
    total_visit: int,
    win_scores: np.ndarray,
    node_visits: np.ndarray,
    exploration: float = EXPLORATION,
) -> np.ndarray:
    """Vectorized uct_value over a sibling set."""
    node_visits = node_visits.astype(np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        exploit = win_scores / node_visits
        explore = exploration * np.sqrt(math.log(max(total_visit, 1)) / node_visits)
        u = exploit + explore
    return np.where(node_visits == 0, np.inf, u)


@dataclass
class SearchStats:
    """Summary of the last search."""

    iterations: int
    nodes: int
    elapsed_ms: float
    best_score: int
    best_visits: int
    stopped_by: str  # "iterations" or "deadline"


class MCTS(Generic[S]):
    """
    Monte Carlo Tree Search with UCT and random playouts.

    A fresh tree is built for every call and discarded when it returns.

    Args:
        iterations: Iteration budget per decision (default 10,000)
        time_budget_ms: Optional wall-clock budget per decision. When set,
            the search stops at whichever budget runs out first
        exploration: UCT exploration constant (default sqrt(2))
        rng: numpy Generator for playouts and child choice. Defaults to the
            process-wide np.random state
    """

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        time_budget_ms: Optional[float] = None,
        exploration: float = EXPLORATION,
        rng: Optional[np.random.Generator] = None,
    ):
        if iterations < 1:
            raise ValueError("iterations must be at least 1")
        if time_budget_ms is not None and time_budget_ms <= 0:
            raise ValueError("time_budget_ms must be positive")
        self.iterations = iterations
        self.time_budget_ms = time_budget_ms
        self.exploration = exploration
        self.rng = rng if rng is not None else np.random
        self.last_stats: Optional[SearchStats] = None

    def find_next_move(self, state: S, player: Any) -> S:
        """
        Pick the move for player from state.

        Args:
            state: Position to move from; must be in progress
            player: Player about to move

        Returns:
            Copy of the successor state with the highest score

        Raises:
            ValueError: if state is already terminal
            GameContractError: if the game reports no legal continuation
                for an in-progress position
        """
        tree = self.search(state, player)
        best = self.best_child(tree)
        return tree[best].state.copy()

    def search(self, state: S, player: Any) -> SearchTree[S]:
        """
        Run the iteration loop from state and return the tree.

        The root's player is player's opponent: it is the side whose
        move produced the root position.
        """
        if state.status().is_terminal:
            raise ValueError("Cannot search from a finished game")

        tree = SearchTree(state.copy(), player.other)
        clock = TimeManager(self.time_budget_ms)
        opponent = player.other

        done = 0
        stopped_by = "iterations"
        while done < self.iterations:
            if done > 0 and clock.expired():
                stopped_by = "deadline"
                break
            self._iterate(tree, opponent)
            done += 1

        if tree.root.is_leaf:
            raise GameContractError(
                "Search finished with no moves from an in-progress position"
            )

        best = self.best_child(tree)
        self.last_stats = SearchStats(
            iterations=done,
            nodes=len(tree),
            elapsed_ms=clock.elapsed_ms(),
            best_score=tree.score(best),
            best_visits=tree.visit_count(best),
            stopped_by=stopped_by,
        )
        logger.debug(
            "search: %d iterations, %d nodes, best child score=%d visits=%d (%s)",
            done, len(tree), self.last_stats.best_score,
            self.last_stats.best_visits, stopped_by,
        )
        return tree

    def best_child(self, tree: SearchTree[S]) -> int:
        """Index of the root child with the highest score (first on ties)."""
        children = tree.root.children
        if not children:
            raise GameContractError("Root has no children")
        return children[int(np.argmax(tree.child_scores(0)))]

    def _iterate(self, tree: SearchTree[S], opponent: Any) -> None:
        """Run one select -> expand -> simulate -> backup cycle."""
        leaf = self._select(tree)
        self._expand(tree, leaf)

        children = tree[leaf].children
        if children:
            to_explore = children[random_index(self.rng, len(children))]
        else:
            to_explore = leaf

        status = self._simulate(tree, to_explore, opponent)
        self._backpropagate(tree, to_explore, status)

    def _select(self, tree: SearchTree[S]) -> int:
        """Descend from the root by maximum UCT until a node without children."""
        index = 0
        while tree[index].children:
            scores = uct_scores(
                tree.visit_count(index),
                tree.child_scores(index),
                tree.child_visits(index),
                self.exploration,
            )
            index = tree[index].children[int(np.argmax(scores))]
        return index

    def _expand(self, tree: SearchTree[S], index: int) -> None:
        """Attach every successor of a non-terminal node. No-op when terminal."""
        node = tree[index]
        if node.state.status().is_terminal:
            return

        successors = node.state.next_states()
        if not successors:
            raise GameContractError(
                "next_states() is empty for an in-progress position"
            )
        tree.add_children(index, successors, node.player.other)

    def _simulate(self, tree: SearchTree[S], index: int, opponent: Any) -> Status:
        """
        Random playout from the node's state.

        If the position already shows the opponent as winner, the move that
        allowed it is marked as losing and the playout is skipped.
        """
        node = tree[index]
        state = node.state.copy()
        status = state.status()

        if status.winner == opponent:
            if node.parent is not None:
                tree.mark_losing(node.parent)
            return status

        while not status.is_terminal:
            state.next_random_play(self.rng)
            status = state.status()
        return status

    def _backpropagate(self, tree: SearchTree[S], index: int, status: Status) -> None:
        """Credit one visit to every node up to the root, and a win where due."""
        for i in tree.path_to_root(index):
            tree.record_visit(i, won=status.winner is not None and status.winner == tree[i].player)
