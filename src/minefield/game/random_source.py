"""
Sources of randomness for mine placement.

The board only ever asks for "an integer below n", so anything with a
``next_below`` method can drive it: NumPy in play, a scripted list in tests.
"""
from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Supplies uniformly distributed integers."""

    def next_below(self, n: int) -> int:
        """Return an integer in [0, n)."""
        ...


class NumpyRandomSource:
    """RandomSource backed by a NumPy Generator (unseeded unless asked)."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = np.random.default_rng(seed)

    def next_below(self, n: int) -> int:
        return int(self.rng.integers(n))
