"""
Command-line interface for uctsearch.

Commands:
- list-games: Show available games
- play: Play against the engine in the terminal
- move: Ask the engine for one move from a tic-tac-toe position
- eval: Pit the engine against a random or weaker engine
- benchmark: Test search speed
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
import typer
from rich.table import Table

from .utils.logging import console

app = typer.Typer(
    name="uct",
    help="UCT Monte Carlo Tree Search - play and evaluate",
    no_args_is_help=True,
)


def _load_config(config_path: Optional[Path]):
    from .utils import Config, get_default_config

    if config_path is None:
        return get_default_config()
    if not config_path.exists():
        console.print(f"[red]Config file not found: {config_path}[/]")
        raise typer.Exit(1)
    try:
        return Config.load(str(config_path))
    except (TypeError, ValueError) as e:
        console.print(f"[red]Invalid config {config_path}: {e}[/]")
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show search debug logs"),
) -> None:
    """UCT Monte Carlo Tree Search."""
    from .utils import setup_logging

    setup_logging(verbose)
    ctx.obj = {"verbose": verbose}


@app.command("list-games")
def list_games_cmd() -> None:
    """List all available games."""
    from .games import list_games, get_game

    table = Table(title="Available Games")
    table.add_column("Name", style="cyan")
    table.add_column("Opening moves", style="yellow")

    for name in list_games():
        state = get_game(name).initial_state()
        table.add_row(name, str(len(state.next_states())))

    console.print(table)


@app.command()
def play(
    ctx: typer.Context,
    game_name: Optional[str] = typer.Option(None, "--game", "-g", help="Game to play"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", help="MCTS iterations per move"),
    time_ms: Optional[float] = typer.Option(None, "--time-ms", help="Wall-clock budget per move"),
    difficulty: Optional[str] = typer.Option(None, "--difficulty", "-d", help="easy, medium, hard, impossible"),
    human_first: Optional[bool] = typer.Option(None, "--first/--second", help="Human plays first"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML file"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Directory for game logs"),
) -> None:
    """Play against the engine in the terminal."""
    from .games import get_game, move_between, format_move, TicTacToeState
    from .mcts import MCTS
    from .play import get_difficulty_config, parse_difficulty, prompt_move
    from .utils import GameLogger, GameRecord, print_board, print_config, set_seed

    config = _load_config(config_path)
    if game_name is not None:
        config.play.game = game_name
    if iterations is not None:
        config.search.iterations = iterations
    if time_ms is not None:
        config.search.time_budget_ms = time_ms
    if difficulty is not None:
        config.play.difficulty = difficulty
    if human_first is not None:
        config.play.human_first = human_first
    if seed is not None:
        config.seed = seed
    if log_dir is not None:
        config.log_dir = str(log_dir)

    try:
        game_cls = get_game(config.play.game)
        if config.play.difficulty:
            diff = get_difficulty_config(parse_difficulty(config.play.difficulty), config.play.game)
            config.search.iterations = diff.iterations
            console.print(f"[blue]Difficulty: {diff.name} ({diff.iterations} iterations)[/]")
        engine = MCTS(
            iterations=config.search.iterations,
            time_budget_ms=config.search.time_budget_ms,
            exploration=config.search.exploration,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if config.seed is not None:
        set_seed(config.seed)
    if _verbose(ctx):
        print_config(config)

    state = game_cls.initial_state()
    human = state.current_player if config.play.human_first else state.current_player.other
    moves: list[str] = []
    search_ms: list[float] = []

    console.print(f"\n[bold]Playing {config.play.game}[/]")
    console.print(f"You are {human}, engine is {human.other}\n")

    while True:
        print_board(state.render(), title=config.play.game)

        status = state.status()
        if status.is_terminal:
            if status.winner is None:
                console.print("[yellow]Draw![/]")
            else:
                color = "green" if status.winner == human else "red"
                console.print(f"[{color}]{status.winner} wins![/]")
            break

        if state.current_player == human:
            if isinstance(state, TicTacToeState):
                new_state = prompt_move(
                    state,
                    ask=lambda: typer.prompt("Your move (e.g. b2)"),
                    report=lambda msg: console.print(f"[red]{msg}, try again[/]"),
                )
            else:
                new_state = _prompt_column(state)
        else:
            console.print("[cyan]Engine thinking...[/]")
            new_state = engine.find_next_move(state, state.current_player)
            search_ms.append(engine.last_stats.elapsed_ms)

        if isinstance(state, TicTacToeState):
            move = format_move(*move_between(state, new_state))
        else:
            move = str(_changed_column(state, new_state))
        if state.current_player != human:
            console.print(f"Engine played {move}\n")
        moves.append(move)
        state = new_state

    winner = state.status().winner
    config.ensure_dirs()
    logger = GameLogger(config.log_dir)
    logger.log_game(GameRecord(
        game=config.play.game,
        moves=moves,
        result=str(winner) if winner is not None else "draw",
        iterations=config.search.iterations,
        human_mark=str(human),
        search_ms=search_ms,
    ))


def _verbose(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("verbose"))


def _prompt_column(state):
    legal = state.legal_columns()
    while True:
        try:
            column = int(typer.prompt(f"Your move {legal}"))
            return state.play(column)
        except ValueError as e:
            console.print(f"[red]{e}, try again[/]")


def _changed_column(before, after) -> int:
    import numpy as np

    return int(np.argwhere(before.board != after.board)[0][1])


@app.command()
def move(
    board: str = typer.Argument(..., help="Tic-tac-toe rows top to bottom, e.g. 'x.o/.x./..o'"),
    iterations: int = typer.Option(10_000, "--iterations", "-n", help="MCTS iterations"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Print the engine's move for a tic-tac-toe position."""
    from .games import TicTacToeState, format_move, move_between
    from .mcts import MCTS
    from .utils import make_rng, print_board

    try:
        state = TicTacToeState.from_string(board)
        engine = MCTS(iterations=iterations, rng=make_rng(seed) if seed is not None else None)
        reply = engine.find_next_move(state, state.current_player)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    stats = engine.last_stats
    print_board(reply.render(), title="Engine reply")
    console.print(
        f"[green]{state.current_player} plays {format_move(*move_between(state, reply))}[/] "
        f"(score {stats.best_score}, {stats.best_visits} visits, {stats.nodes} nodes)"
    )


@app.command("eval")
def evaluate(
    ctx: typer.Context,
    game_name: str = typer.Option("tictactoe", "--game", "-g", help="Game to play"),
    games: Optional[int] = typer.Option(None, "--games", help="Number of games"),
    iterations: int = typer.Option(1_000, "--iterations", "-n", help="Candidate MCTS iterations"),
    opponent: Optional[str] = typer.Option(None, "--opponent", help="random or mcts"),
    opponent_iterations: Optional[int] = typer.Option(None, "--opponent-iterations", help="Opponent MCTS iterations"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config YAML file"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
) -> None:
    """Evaluate the engine against an opponent."""
    from .games import get_game
    from .eval import Arena, mcts_agent, random_agent
    from .mcts import MCTS
    from .utils import create_progress, make_rng, print_config

    config = _load_config(config_path)
    games = games if games is not None else config.arena.num_games
    opponent = opponent if opponent is not None else config.arena.opponent
    if opponent_iterations is None:
        opponent_iterations = config.arena.opponent_iterations
    if seed is None:
        seed = config.seed
    config.play.game = game_name
    config.search.iterations = iterations
    config.arena.num_games = games
    config.arena.opponent = opponent
    config.arena.opponent_iterations = opponent_iterations
    config.seed = seed

    try:
        game_cls = get_game(game_name)
        candidate = mcts_agent(MCTS(iterations=iterations, rng=make_rng(seed)))
        if opponent == "random":
            reference = random_agent(make_rng(None if seed is None else seed + 1))
        elif opponent == "mcts":
            reference = mcts_agent(MCTS(
                iterations=opponent_iterations,
                rng=make_rng(None if seed is None else seed + 1),
            ))
        else:
            raise ValueError(f"Unknown opponent '{opponent}'. Choose: random, mcts")
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if _verbose(ctx):
        print_config(config)

    arena = Arena(game_cls)

    console.print("[cyan]Running evaluation...[/]")
    wins, losses, draws = 0, 0, 0
    with create_progress() as progress:
        task = progress.add_task("Arena [W:0 L:0 D:0]", total=games)

        def callback(n, result_str):
            nonlocal wins, losses, draws
            if result_str == "W":
                wins += 1
            elif result_str == "L":
                losses += 1
            else:
                draws += 1
            progress.update(
                task,
                advance=1,
                description=f"Arena [W:{wins} L:{losses} D:{draws}]"
            )

        result = arena.evaluate(candidate, reference, games, progress_callback=callback)

    table = Table(title=f"Results ({iterations} iterations vs {opponent})")
    table.add_column("Wins", style="green")
    table.add_column("Losses", style="red")
    table.add_column("Draws", style="yellow")
    table.add_column("Score", style="cyan")
    table.add_row(
        str(result.wins), str(result.losses), str(result.draws), f"{result.score*100:.1f}%"
    )
    console.print(table)


@app.command()
def benchmark(
    game_name: str = typer.Option("tictactoe", "--game", "-g", help="Game to benchmark"),
    iterations: int = typer.Option(10_000, "--iterations", "-n", help="MCTS iterations"),
    games: int = typer.Option(3, "--games", help="Decisions to time"),
) -> None:
    """Benchmark search speed from the opening position."""
    import time
    from .games import get_game
    from .mcts import MCTS

    game_cls = get_game(game_name)
    engine = MCTS(iterations=iterations)
    state = game_cls.initial_state()

    console.print(f"[cyan]Timing {games} searches of {iterations} iterations on {game_name}...[/]")

    start = time.time()
    for i in range(games):
        engine.find_next_move(state, state.current_player)
        console.print(f"Search {i+1}: {engine.last_stats.nodes} nodes")

    elapsed = time.time() - start
    console.print(f"\n[green]Total time: {elapsed:.2f}s[/]")
    console.print(f"[green]Iterations/sec: {games*iterations/elapsed:.0f}[/]")


if __name__ == "__main__":
    app()
