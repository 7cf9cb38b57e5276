"""
Random seed management for reproducibility.
"""

from __future__ import annotations

import random
from typing import Optional
import numpy as np


def set_seed(seed: int) -> None:
    """
    Set random seeds for reproducibility.

    Sets seeds for:
    - Python random
    - NumPy (the process-wide state the engine draws from by default)

    Args:
        seed: Random seed value
    """
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create an independent generator, e.g. one per engine in a match."""
    return np.random.default_rng(seed)
