"""Tests for MCTS invariants."""

import math

import numpy as np
import pytest

from uctsearch.games import (
    Connect4State,
    GameContractError,
    Mark,
    Status,
    TicTacToeState,
    move_between,
)
from uctsearch.mcts import LOSING_SCORE, MCTS, SearchTree, uct_scores, uct_value


class TestUCT:
    def test_unvisited_is_infinite(self):
        assert uct_value(10, 0, 0) == math.inf
        assert uct_value(0, 5, 0) == math.inf

    def test_formula(self):
        expected = 3 / 4 + math.sqrt(2) * math.sqrt(math.log(10) / 4)
        assert uct_value(10, 3, 4) == pytest.approx(expected)

    def test_non_increasing_in_visits(self):
        values = [uct_value(100, 2, n) for n in range(1, 60)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_vectorized_matches_scalar(self):
        scores = np.array([0, 3, 5, LOSING_SCORE], dtype=np.int64)
        visits = np.array([0, 4, 9, 2], dtype=np.int64)
        result = uct_scores(20, scores, visits)
        assert result[0] == np.inf
        for i in range(1, 4):
            assert result[i] == pytest.approx(uct_value(20, int(scores[i]), int(visits[i])))

    def test_losing_score_is_never_preferred(self):
        scores = np.array([LOSING_SCORE, 0], dtype=np.int64)
        visits = np.array([1, 50], dtype=np.int64)
        assert int(np.argmax(uct_scores(60, scores, visits))) == 1


class TestExpansion:
    def test_expansion_completeness(self):
        state = TicTacToeState.from_string("xo./.../...")
        engine = MCTS(iterations=1, rng=np.random.default_rng(0))
        tree = SearchTree(state, Mark.O)

        engine._expand(tree, 0)

        children = tree.root.children
        assert len(children) == 7
        child_states = [tree[i].state for i in children]
        assert len(set(child_states)) == 7
        assert set(child_states) == set(state.next_states())
        for i in children:
            assert tree[i].parent == 0
            assert tree[i].player is Mark.X
            assert tree.visit_count(i) == 0
            assert tree.score(i) == 0

    def test_terminal_expansion_is_noop(self):
        state = TicTacToeState.from_string("xxx/oo./...")
        engine = MCTS(iterations=1)
        tree = SearchTree(state, Mark.X)
        engine._expand(tree, 0)
        assert tree.root.is_leaf
        assert len(tree) == 1


class TestBackpropagation:
    def _two_level_tree(self):
        state = TicTacToeState.initial_state()
        tree = SearchTree(state, Mark.O)
        children = tree.add_children(0, state.next_states(), Mark.X)
        grandchildren = tree.add_children(
            children[0], tree[children[0]].state.next_states(), Mark.O
        )
        return tree, children, grandchildren

    def test_visits_along_path(self):
        tree, children, grandchildren = self._two_level_tree()
        engine = MCTS(iterations=1)

        engine._backpropagate(tree, grandchildren[0], Status.won(Mark.X))

        path = tree.path_to_root(grandchildren[0])
        assert path == [grandchildren[0], children[0], 0]
        for i in path:
            assert tree.visit_count(i) == 1
        assert tree.visit_count(children[1]) == 0
        assert tree.visit_count(grandchildren[1]) == 0

    def test_only_matching_player_scores(self):
        tree, children, grandchildren = self._two_level_tree()
        engine = MCTS(iterations=1)

        engine._backpropagate(tree, grandchildren[0], Status.won(Mark.X))

        assert tree.score(children[0]) == 1
        assert tree.score(grandchildren[0]) == 0
        assert tree.score(0) == 0

    def test_draw_scores_nobody(self):
        tree, children, grandchildren = self._two_level_tree()
        engine = MCTS(iterations=1)

        engine._backpropagate(tree, grandchildren[0], Status.draw())

        assert tree.scores.sum() == 0
        assert tree.visits.sum() == 3


class TestSimulation:
    def test_opponent_win_marks_parent(self):
        # X to move; X's move at a3 lets O complete the top row
        state = TicTacToeState.from_string("oo./.x./..x")
        tree = SearchTree(state, Mark.O)
        children = tree.add_children(0, state.next_states(), Mark.X)
        x_node = next(
            i for i in children if move_between(state, tree[i].state) == (2, 0)
        )
        o_win = tree[x_node].state.play(0, 2)
        (o_node,) = tree.add_children(x_node, [o_win], Mark.O)

        engine = MCTS(iterations=1)
        status = engine._simulate(tree, o_node, opponent=Mark.O)

        assert status == Status.won(Mark.O)
        assert tree.score(x_node) == LOSING_SCORE

    def test_losing_line_still_takes_visits(self):
        state = TicTacToeState.from_string("oo./.x./..x")
        tree = SearchTree(state, Mark.O)
        (child,) = tree.add_children(0, [state.play(2, 0)], Mark.X)
        tree.mark_losing(child)
        tree.record_visit(child, won=True)
        assert tree.score(child) == LOSING_SCORE + 1
        assert tree.visit_count(child) == 1

    def test_playout_reaches_terminal(self):
        state = TicTacToeState.initial_state()
        tree = SearchTree(state, Mark.O)
        engine = MCTS(iterations=1, rng=np.random.default_rng(5))
        status = engine._simulate(tree, 0, opponent=Mark.O)
        assert status.is_terminal
        # Simulation works on a copy
        assert np.all(tree.root.state.board == 0)


class TestFindNextMove:
    def test_result_is_legal(self):
        state = TicTacToeState.from_string("x../.o./...")
        engine = MCTS(iterations=300, rng=np.random.default_rng(1))
        result = engine.find_next_move(state, state.current_player)
        assert result in state.next_states()

    def test_input_not_mutated(self):
        state = TicTacToeState.from_string("x../.o./...")
        snapshot = state.copy()
        MCTS(iterations=200, rng=np.random.default_rng(2)).find_next_move(state, Mark.X)
        assert state == snapshot

    def test_single_continuation(self):
        state = TicTacToeState.from_string("xox/xoo/ox.")
        engine = MCTS(iterations=500, rng=np.random.default_rng(3))
        result = engine.find_next_move(state, state.current_player)
        assert result == state.play(2, 2)
        assert engine.last_stats.iterations == 500

    def test_blocks_open_row(self):
        # O threatens c1; X must take it
        state = TicTacToeState.from_string("oo./.x./..x")
        assert state.current_player is Mark.X
        engine = MCTS(iterations=10_000, rng=np.random.default_rng(42))
        result = engine.find_next_move(state, Mark.X)
        assert move_between(state, result) == (0, 2)

    def test_takes_immediate_win(self):
        state = TicTacToeState.from_string("xx./oo./...")
        engine = MCTS(iterations=10_000, rng=np.random.default_rng(11))
        result = engine.find_next_move(state, Mark.X)
        assert result.status() == Status.won(Mark.X)

    def test_terminal_input_raises(self):
        state = TicTacToeState.from_string("xxx/oo./...")
        with pytest.raises(ValueError):
            MCTS(iterations=10).find_next_move(state, Mark.O)

    def test_stats_recorded(self):
        state = TicTacToeState.initial_state()
        engine = MCTS(iterations=250, rng=np.random.default_rng(4))
        tree = engine.search(state, Mark.X)
        stats = engine.last_stats
        assert stats.iterations == 250
        assert stats.nodes == len(tree)
        assert stats.stopped_by == "iterations"
        assert tree.visit_count(0) == 250

    def test_deadline_stops_search(self):
        state = Connect4State.initial_state()
        engine = MCTS(iterations=10_000_000, time_budget_ms=50, rng=np.random.default_rng(0))
        result = engine.find_next_move(state, state.current_player)
        assert result in state.next_states()
        assert engine.last_stats.stopped_by == "deadline"
        assert 1 <= engine.last_stats.iterations < 10_000_000

    def test_uses_global_random_state_by_default(self):
        state = TicTacToeState.initial_state()
        np.random.seed(42)
        first = MCTS(iterations=200).find_next_move(state, Mark.X)
        np.random.seed(42)
        second = MCTS(iterations=200).find_next_move(state, Mark.X)
        assert first == second

    def test_invalid_budgets(self):
        with pytest.raises(ValueError):
            MCTS(iterations=0)
        with pytest.raises(ValueError):
            MCTS(time_budget_ms=0)


class _NoMovesState(TicTacToeState):
    """Broken game: claims to be in progress but offers no moves."""

    def next_states(self):
        return []

    def copy(self):
        return _NoMovesState(board=self.board.copy(), to_move=self.to_move)


class TestContractViolations:
    def test_empty_next_states_fails_loudly(self):
        state = _NoMovesState(board=np.zeros((3, 3), dtype=np.int8))
        with pytest.raises(GameContractError):
            MCTS(iterations=10).find_next_move(state, Mark.X)
