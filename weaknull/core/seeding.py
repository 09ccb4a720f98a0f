"""
Seeding helpers for reproducible, independent per-call randomness.

Each statistic call owns a private generator. When calls run in parallel
they should receive seeds derived here rather than share one generator.
"""

from typing import List, Optional, Union

import numpy as np


RandomState = Optional[Union[int, np.random.Generator, np.random.SeedSequence]]


def make_rng(random_state: RandomState = None) -> np.random.Generator:
    """Fresh generator for one call."""
    return np.random.default_rng(random_state)


def spawn_seeds(random_state: Optional[int], n: int) -> List[int]:
    """
    Draw n independent integer seeds.

    Args:
        random_state: Base seed (None for fresh entropy)
        n: Number of seeds

    Returns:
        List of n seeds
    """
    children = np.random.SeedSequence(random_state).spawn(n)
    return [int(child.generate_state(1)[0]) for child in children]


def derive_seed(random_state: Optional[int], *keys: int) -> Optional[int]:
    """
    Deterministic seed for a key such as (subject index, permutation index).

    Returns None when random_state is None so unseeded runs stay unseeded.

    Example:
        >>> derive_seed(42, 3, 0) == derive_seed(42, 3, 0)
        True
    """
    if random_state is None:
        return None
    for key in keys:
        if int(key) < 0:
            raise ValueError(f"Seed keys must be non-negative. Got {key}")
    seq = np.random.SeedSequence(random_state, spawn_key=tuple(int(k) for k in keys))
    return int(seq.generate_state(1)[0])
