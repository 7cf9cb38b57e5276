"""
Monte Carlo Tree Search module.
"""

from .node import LOSING_SCORE, Node, SearchTree
from .search import (
    DEFAULT_ITERATIONS,
    EXPLORATION,
    MCTS,
    SearchStats,
    uct_scores,
    uct_value,
)
from .time_manager import TimeManager

__all__ = [
    "LOSING_SCORE",
    "Node",
    "SearchTree",
    "DEFAULT_ITERATIONS",
    "EXPLORATION",
    "MCTS",
    "SearchStats",
    "uct_scores",
    "uct_value",
    "TimeManager",
]
