"""
Random number capability threaded through every stochastic REVAC step.

Operators never touch a process-wide generator; they receive a `RandomSource`
so runs can be seeded and tests can script the exact draws.
"""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RandomSource(Protocol):
    """Minimal interface the tuner needs from a random number generator."""

    def uniform(self, low: float, high: float) -> float:
        """Return a real drawn uniformly from ``[low, high]``."""

    def pick(self, k: int) -> int:
        """Return an index drawn uniformly from ``0..k-1``."""


class NumpyRandomSource:
    """`RandomSource` backed by a numpy ``Generator``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform(self, low: float, high: float) -> float:
        if low == high:
            return float(low)
        # Generator.uniform may round up to ``high``; clamp keeps the draw in range.
        return float(min(max(self._rng.uniform(low, high), low), high))

    def pick(self, k: int) -> int:
        if k < 1:
            raise ValueError("Cannot pick from an empty range.")
        return int(self._rng.integers(0, k))
