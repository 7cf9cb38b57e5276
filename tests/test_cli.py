"""Smoke tests for the command-line interface."""

from typer.testing import CliRunner

from uctsearch.cli import app


runner = CliRunner()

ALL_CELLS = "\n".join(f"{c}{r}" for r in "123" for c in "abc")


class TestCli:
    def test_list_games(self):
        result = runner.invoke(app, ["list-games"])
        assert result.exit_code == 0
        assert "tictactoe" in result.output
        assert "connect4" in result.output

    def test_move_blocks_threat(self):
        result = runner.invoke(app, ["move", "oo./.x./..x", "--iterations", "10000", "--seed", "42"])
        assert result.exit_code == 0
        assert "X plays c1" in result.output
        assert "Engine reply" in result.output

    def test_move_rejects_bad_board(self):
        result = runner.invoke(app, ["move", "xx./.../..."])
        assert result.exit_code == 1

    def test_play_full_game(self, tmp_path):
        log_dir = tmp_path / "runs" / "play"
        user_input = ALL_CELLS + "\n" + ALL_CELLS + "\n"
        result = runner.invoke(
            app,
            ["play", "-n", "200", "--seed", "1", "--log-dir", str(log_dir)],
            input=user_input,
        )
        assert result.exit_code == 0, result.output
        assert "wins!" in result.output or "Draw!" in result.output
        assert list(log_dir.glob("games_*.jsonl"))

    def test_play_rejects_unknown_difficulty(self):
        result = runner.invoke(app, ["play", "--difficulty", "nightmare"])
        assert result.exit_code == 1

    def test_eval(self):
        result = runner.invoke(app, ["eval", "--games", "2", "-n", "50", "--seed", "0"])
        assert result.exit_code == 0, result.output
        assert "Wins" in result.output
        assert "50 iterations" in result.output

    def test_verbose_eval_prints_config(self):
        result = runner.invoke(app, ["--verbose", "eval", "--games", "1", "-n", "20", "--seed", "0"])
        assert result.exit_code == 0, result.output
        assert "Configuration" in result.output
        assert "arena.num_games" in result.output

    def test_quiet_eval_skips_config(self):
        result = runner.invoke(app, ["eval", "--games", "1", "-n", "20", "--seed", "0"])
        assert result.exit_code == 0, result.output
        assert "Configuration" not in result.output
