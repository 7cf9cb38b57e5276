"""Tests for difficulty presets and console move input."""

import pytest

from uctsearch.games import Mark, TicTacToeState
from uctsearch.play import (
    DIFFICULTY_PRESETS,
    Difficulty,
    DifficultyConfig,
    difficulty_from_slider,
    get_difficulty_config,
    parse_difficulty,
    prompt_move,
)


class TestDifficulty:
    def test_presets_increase(self):
        iterations = [DIFFICULTY_PRESETS[d].iterations for d in Difficulty]
        assert iterations == sorted(iterations)

    def test_game_override(self):
        config = get_difficulty_config(Difficulty.IMPOSSIBLE, "tictactoe")
        assert config.iterations == 10_000
        assert get_difficulty_config(Difficulty.EASY, "connect4") is DIFFICULTY_PRESETS[Difficulty.EASY]

    def test_parse(self):
        assert parse_difficulty(" Hard ") is Difficulty.HARD
        with pytest.raises(ValueError, match="Choose"):
            parse_difficulty("nightmare")

    def test_slider_bounds(self):
        assert difficulty_from_slider(0).iterations == 10
        assert difficulty_from_slider(100).iterations == 20_000
        assert difficulty_from_slider(-50).iterations == 10
        assert difficulty_from_slider(40).iterations < difficulty_from_slider(60).iterations

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            DifficultyConfig(iterations=0)


class TestPromptMove:
    def test_reprompts_until_legal(self):
        state = TicTacToeState.from_string("x../.../...")
        answers = iter(["", "zz", "a1", "a4", "b2"])
        errors = []

        new_state = prompt_move(state, ask=lambda: next(answers), report=errors.append)

        assert new_state.board[1, 1] == Mark.O.value
        assert len(errors) == 4
        assert any("occupied" in e for e in errors)

    def test_accepts_first_valid(self):
        state = TicTacToeState.initial_state()
        errors = []
        new_state = prompt_move(state, ask=lambda: "C3", report=errors.append)
        assert new_state.board[2, 2] == Mark.X.value
        assert errors == []
