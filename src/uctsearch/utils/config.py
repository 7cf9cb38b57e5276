"""
Configuration management for uctsearch.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class SearchConfig:
    """MCTS configuration."""

    iterations: int = 10_000
    time_budget_ms: Optional[float] = None  # Stop early at this wall-clock budget
    exploration: float = math.sqrt(2)

    def __post_init__(self):
        if self.iterations < 1:
            raise ValueError("iterations must be at least 1")
        if self.time_budget_ms is not None and self.time_budget_ms <= 0:
            raise ValueError("time_budget_ms must be positive")


@dataclass
class PlayConfig:
    """Console play configuration."""

    game: str = "tictactoe"
    human_first: bool = True
    difficulty: Optional[str] = None  # Preset name, overrides search.iterations


@dataclass
class ArenaConfig:
    """Arena match configuration."""

    num_games: int = 20
    opponent: str = "random"  # "random" or "mcts"
    opponent_iterations: int = 100


@dataclass
class Config:
    """Full configuration."""

    # Component configs
    search: SearchConfig = field(default_factory=SearchConfig)
    play: PlayConfig = field(default_factory=PlayConfig)
    arena: ArenaConfig = field(default_factory=ArenaConfig)

    # Global settings
    log_dir: str = "runs"

    # Random seed (None = unseeded)
    seed: Optional[int] = None

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        # Parse nested configs
        return cls(
            search=SearchConfig(**data.get("search", {})),
            play=PlayConfig(**data.get("play", {})),
            arena=ArenaConfig(**data.get("arena", {})),
            log_dir=data.get("log_dir", "runs"),
            seed=data.get("seed"),
        )

    def ensure_dirs(self) -> None:
        """Create output directories if they don't exist."""
        Path(self.log_dir).mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get default configuration."""
    return Config()
