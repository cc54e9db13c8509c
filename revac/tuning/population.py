"""
Population management for the steady-state REVAC loop.

The `Population` owns the vector table, the parallel utility array, and the age
cursor.  Slots keep their identity for the whole run; each generation the slot
under the cursor is overwritten and the cursor moves on, so every vector lives
exactly ``size`` generations regardless of its utility.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import numpy as np

from .parameter import ParameterSpace
from .random_source import RandomSource


@dataclass
class Population:
    """Age-ordered ring of parameter vectors and their utilities."""

    parameters: ParameterSpace
    size: int
    table: np.ndarray = field(init=False, repr=False)
    utility: np.ndarray = field(init=False, repr=False)
    oldest: int = 0
    best_vector: Optional[np.ndarray] = field(default=None, repr=False)
    best_utility: float = float("inf")

    def __post_init__(self) -> None:
        self.table = np.zeros((self.size, len(self.parameters)), dtype=float)
        self.utility = np.full(self.size, np.inf, dtype=float)

    def seed(self, random: RandomSource) -> None:
        """Fill every slot with a vector drawn uniformly from the parameter ranges."""
        for slot in range(self.size):
            self.table[slot] = self.parameters.sample(random)

    def score(self, evaluate: Callable[[int, np.ndarray], float]) -> None:
        """Score every slot in order and record the best vector.

        ``evaluate`` receives the slot index and the vector, so the caller can log
        each result as it arrives.
        """
        for slot in range(self.size):
            self.utility[slot] = evaluate(slot, self.table[slot].copy())
        best = int(np.argmin(self.utility))
        self.best_vector = self.table[best].copy()
        self.best_utility = float(self.utility[best])

    def ranked(self) -> np.ndarray:
        """Slot indices ordered by ascending utility (stable on ties)."""
        return np.argsort(self.utility, kind="stable")

    def top_k(self, k: int) -> np.ndarray:
        """Return copies of the ``k`` best vectors."""
        return self.table[self.ranked()[:k]].copy()

    def replace_oldest(self, vector: Sequence[float]) -> int:
        """Overwrite the oldest slot in place and return its index."""
        self.table[self.oldest] = np.asarray(vector, dtype=float)
        return self.oldest

    def record(self, slot: int, utility: float) -> bool:
        """Store ``utility`` for ``slot``; return ``True`` if it beats the best so far."""
        self.utility[slot] = utility
        if utility < self.best_utility:
            self.best_vector = self.table[slot].copy()
            self.best_utility = float(utility)
            return True
        return False

    def advance(self) -> None:
        self.oldest = (self.oldest + 1) % self.size
