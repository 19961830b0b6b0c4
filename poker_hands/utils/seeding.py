"""Seeding for reproducible hand sampling.

Random hands are drawn through torch, while helpers and tests also use
Python's random and NumPy; set_seed fixes all three at once.
"""

import random
from typing import Optional

import numpy as np
import torch


def set_seed(seed: Optional[int] = None) -> int:
    """Seed random, NumPy and torch (including every CUDA device).

    Args:
        seed: Seed to apply. When None, one is drawn from ``random`` so the
              caller can report it and rerun the same sample later.

    Returns:
        The seed that was applied.

    Example:
        >>> from poker_hands import set_seed
        >>> set_seed(42)
        42
    """
    if seed is None:
        seed = random.randint(0, 2**32 - 1)

    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)

    if torch.cuda.is_available():
        torch.cuda.manual_seed_all(seed)

    return seed
