"""
Variation operators used by REVAC.

`mutate` is the relevance estimation step: for every dimension it sorts the
population by that dimension, centres a window of ``h`` ranks on either side of
the target individual, and draws the new value uniformly between the values
found at the two (clamped) window edges.  Dimensions where the population has
converged yield narrow windows, so sampling concentrates where good values are
currently found without any explicit density model.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from .random_source import RandomSource


def mutation_window(table: np.ndarray, index: int, dimension: int, h: int) -> Tuple[float, float]:
    """Return the ``(low, high)`` sampling interval for one dimension.

    The slots are ordered by their value on ``dimension`` (stable sort), the rank
    of ``index`` is located, and the window ``[rank - h, rank + h]`` is clamped to
    the population.  Because the edges are read from a sorted order,
    ``low <= high`` always holds.
    """

    column = np.asarray(table, dtype=float)[:, dimension]
    order = np.argsort(column, kind="stable")
    position = int(np.flatnonzero(order == index)[0])
    lower = order[max(position - h, 0)]
    upper = order[min(position + h, len(order) - 1)]
    return float(column[lower]), float(column[upper])


def mutate(random: RandomSource, table: np.ndarray, index: int, h: int) -> np.ndarray:
    """Draw a new vector for slot ``index`` from per-dimension marginal windows.

    Only reads ``table``; the caller decides where the result is stored.
    """

    table = np.asarray(table, dtype=float)
    if not 0 <= index < table.shape[0]:
        raise IndexError(f"Slot {index} outside population of size {table.shape[0]}")
    vector = np.empty(table.shape[1], dtype=float)
    for dimension in range(table.shape[1]):
        low, high = mutation_window(table, index, dimension, h)
        vector[dimension] = random.uniform(low, high)
    return vector


def crossover(random: RandomSource, parents: Sequence[Sequence[float]]) -> np.ndarray:
    """Multi-parent uniform crossover.

    Every dimension independently copies its value from a parent chosen
    uniformly at random, so no new values are ever interpolated.
    """

    if len(parents) == 0:
        raise ValueError("crossover requires at least one parent")
    pool = np.asarray(parents, dtype=float)
    child = np.empty(pool.shape[1], dtype=float)
    for dimension in range(pool.shape[1]):
        child[dimension] = pool[random.pick(len(pool)), dimension]
    return child
