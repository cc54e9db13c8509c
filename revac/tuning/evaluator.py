"""
Utility estimation for parameter vectors.

The utility of a vector is the mean fitness over several independent runs of
the meta-heuristic being tuned.  Lower utilities are better.  Runs may be
spread over a thread pool; results are still reduced to a single mean per
vector so the surrounding loop stays sequential and deterministic.
"""

from __future__ import annotations

import math
import numbers
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Mapping, Sequence

import numpy as np

from revac.exceptions import RevacRuntimeError

from .parameter import ParameterSpace

Objective = Callable[[Mapping[str, float]], float]


def _as_fitness(value: object) -> float:
    if not isinstance(value, (numbers.Real, np.generic)):
        raise RevacRuntimeError(
            f"Objective returned a non-numeric fitness: {value!r}",
            context={"fitness": value},
        )
    fitness = float(value)  # type: ignore[arg-type]
    # NaN would never compare below the best utility and stall the run.
    if not math.isfinite(fitness):
        raise RevacRuntimeError(
            f"Objective returned a non-finite fitness: {fitness!r}",
            context={"fitness": fitness},
        )
    return fitness


def evaluate_vector(
    vector: Sequence[float],
    parameters: ParameterSpace,
    objective: Objective,
    runs: int,
    workers: int = 1,
) -> float:
    """Return the mean fitness of ``runs`` calls of ``objective`` on ``vector``.

    Parameters
    ----------
    vector : sequence of float
        Candidate parameter values, positionally matching ``parameters``.
    parameters : ParameterSpace
        Supplies the names used to build the mapping passed to the objective.
    objective : callable
        Takes ``{name: value}`` and performs one stochastic run, returning the
        best fitness found (lower is better).
    runs : int
        Number of independent runs to average, at least one.
    workers : int, default 1
        Size of the thread pool used for the runs; ``1`` runs them inline.

    Returns
    -------
    float
        Arithmetic mean of the returned fitness values.
    """

    if runs < 1:
        raise ValueError("runs must be at least 1")
    mapping = parameters.to_mapping(vector)

    # Each run receives its own copy so an objective mutating its input cannot
    # leak into later runs.
    if workers > 1 and runs > 1:
        with ThreadPoolExecutor(max_workers=min(workers, runs)) as pool:
            raw = list(pool.map(lambda _: objective(dict(mapping)), range(runs)))
    else:
        raw = [objective(dict(mapping)) for _ in range(runs)]

    fitnesses: List[float] = [_as_fitness(value) for value in raw]
    return math.fsum(fitnesses) / runs


class VectorEvaluator:
    """Binds an objective and its evaluation settings to a parameter space."""

    def __init__(
        self,
        parameters: ParameterSpace,
        objective: Objective,
        runs: int = 5,
        workers: int = 1,
    ) -> None:
        self.parameters = parameters
        self.objective = objective
        self.runs = runs
        self.workers = workers
        self.calls = 0

    def __call__(self, vector: Sequence[float]) -> float:
        self.calls += 1
        return evaluate_vector(vector, self.parameters, self.objective, self.runs, self.workers)
