"""Utilities module."""

from .config import (
    Config,
    SearchConfig,
    PlayConfig,
    ArenaConfig,
    get_default_config,
)
from .seed import set_seed, make_rng
from .logging import (
    GameLogger,
    GameRecord,
    console,
    create_progress,
    print_config,
    print_board,
    setup_logging,
)

__all__ = [
    "Config",
    "SearchConfig",
    "PlayConfig",
    "ArenaConfig",
    "get_default_config",
    "set_seed",
    "make_rng",
    "GameLogger",
    "GameRecord",
    "console",
    "create_progress",
    "print_config",
    "print_board",
    "setup_logging",
]
