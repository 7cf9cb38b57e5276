"""
Play module for console games with difficulty control.
"""

from .difficulty import (
    Difficulty,
    DifficultyConfig,
    DIFFICULTY_PRESETS,
    get_difficulty_config,
    parse_difficulty,
    difficulty_from_slider,
)
from .human import prompt_move

__all__ = [
    "Difficulty",
    "DifficultyConfig",
    "DIFFICULTY_PRESETS",
    "get_difficulty_config",
    "parse_difficulty",
    "difficulty_from_slider",
    "prompt_move",
]
