"""
Difficulty system for the engine.

Difficulty is controlled by the iteration budget: more iterations means
more playouts per decision and stronger play.

The system supports:
- Preset difficulties (Easy, Medium, Hard, Impossible)
- Continuous slider (0-100 mapped to iteration count)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import math


class Difficulty(Enum):
    """Preset difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    IMPOSSIBLE = "impossible"


@dataclass
class DifficultyConfig:
    """
    Configuration for engine difficulty.

    Attributes:
        iterations: Number of MCTS iterations per move
        name: Human-readable name
        description: Description for UI
    """
    iterations: int
    name: str = ""
    description: str = ""

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError("Iterations must be at least 1")


# Default presets - work well for most games
DIFFICULTY_PRESETS: dict[Difficulty, DifficultyConfig] = {
    Difficulty.EASY: DifficultyConfig(
        iterations=100,
        name="Easy",
        description="Beginner friendly - makes mistakes often",
    ),
    Difficulty.MEDIUM: DifficultyConfig(
        iterations=1_000,
        name="Medium",
        description="Moderate challenge - occasional mistakes",
    ),
    Difficulty.HARD: DifficultyConfig(
        iterations=5_000,
        name="Hard",
        description="Strong play - rare mistakes",
    ),
    Difficulty.IMPOSSIBLE: DifficultyConfig(
        iterations=20_000,
        name="Impossible",
        description="Maximum strength",
    ),
}


# Game-specific presets (some games need different scaling)
GAME_DIFFICULTY_OVERRIDES: dict[str, dict[Difficulty, DifficultyConfig]] = {
    "tictactoe": {
        # Tic-tac-toe is tiny, a few hundred playouts already see everything
        Difficulty.EASY: DifficultyConfig(
            iterations=20,
            name="Easy",
            description="Misses threats regularly",
        ),
        Difficulty.MEDIUM: DifficultyConfig(
            iterations=200,
            name="Medium",
            description="Decent but beatable",
        ),
        Difficulty.HARD: DifficultyConfig(
            iterations=2_000,
            name="Hard",
            description="Strong play",
        ),
        Difficulty.IMPOSSIBLE: DifficultyConfig(
            iterations=10_000,
            name="Impossible",
            description="Blocks every threat",
        ),
    },
}


def get_difficulty_config(
    difficulty: Difficulty,
    game_name: Optional[str] = None,
) -> DifficultyConfig:
    """
    Get difficulty configuration.

    Args:
        difficulty: Preset difficulty level
        game_name: Optional game name for game-specific tuning

    Returns:
        DifficultyConfig for the specified difficulty
    """
    if game_name and game_name in GAME_DIFFICULTY_OVERRIDES:
        return GAME_DIFFICULTY_OVERRIDES[game_name][difficulty]
    return DIFFICULTY_PRESETS[difficulty]


def parse_difficulty(name: str) -> Difficulty:
    """Look up a preset by name, case-insensitive."""
    try:
        return Difficulty(name.strip().lower())
    except ValueError:
        choices = ", ".join(d.value for d in Difficulty)
        raise ValueError(f"Invalid difficulty '{name}'. Choose: {choices}") from None


def difficulty_from_slider(
    value: float,
    min_iterations: int = 10,
    max_iterations: int = 20_000,
) -> DifficultyConfig:
    """
    Create difficulty config from a continuous slider value.

    Maps a 0-100 slider to an iteration count on a log scale, so low values
    feel more different (10 vs 20 iterations matters more than 19,000 vs
    19,010).

    Args:
        value: Slider value from 0 to 100
        min_iterations: Iterations at value=0
        max_iterations: Iterations at value=100

    Returns:
        DifficultyConfig for the slider position
    """
    # Clamp value to valid range
    value = max(0.0, min(100.0, value))
    t = value / 100.0

    log_min = math.log(min_iterations)
    log_max = math.log(max_iterations)
    iterations = int(round(math.exp(log_min + t * (log_max - log_min))))

    if value < 25:
        name = "Beginner"
    elif value < 50:
        name = "Intermediate"
    elif value < 75:
        name = "Advanced"
    elif value < 95:
        name = "Expert"
    else:
        name = "Maximum"

    return DifficultyConfig(
        iterations=iterations,
        name=name,
        description=f"{iterations} iterations",
    )
