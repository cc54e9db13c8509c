"""
REVAC tuning loop.

`RevacTuner` runs Relevance Estimation and Value Calibration (Nannen & Eiben)
against an arbitrary stochastic meta-heuristic treated as a noisy, black-box
objective.  After a uniformly drawn initial population is scored, every
generation recombines the best ``parents`` vectors into a child, writes it over
the oldest slot, mutates that slot from the per-dimension order statistics of
the population, and scores the result.  The loop stops once exactly
``evaluations`` vectors have been scored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import IO, Any, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np
from loguru import logger

from revac.exceptions import RevacConfigError
from revac.utils.config_loader import ConfigLike, ConfigLoader
from revac.utils.logger import ExperimentLogger

from .evaluator import Objective, VectorEvaluator
from .operators import crossover, mutate
from .parameter import ParameterSpace, ParameterSpec
from .population import Population
from .progress import ProgressLog
from .random_source import NumpyRandomSource, RandomSource

EVALUATE_MODES = ("child", "mutant")


@dataclass
class TuningConfig:
    """Options controlling a REVAC run."""

    vectors: int = 80
    parents: int = 40
    h: int = 10
    runs: int = 5
    evaluations: int = 5000
    output: Optional[Union[str, Path, IO[str]]] = None
    seed: Optional[int] = None
    evaluate: str = "child"
    workers: int = 1

    @classmethod
    def from_options(
        cls,
        options: Optional[Mapping[str, Any]] = None,
        *,
        config: Optional[ConfigLike] = None,
        profile: Optional[str] = None,
    ) -> "TuningConfig":
        """Merge schema defaults, a profile, a config source, and flat ``options``.

        ``options`` uses the flat keys of the ``tuning`` section.  An open file
        handle passed as ``output`` bypasses the configuration layer.
        """
        options = {
            key: value.item() if isinstance(value, np.generic) else value for key, value in (options or {}).items()
        }
        handle = None
        if "output" in options and not isinstance(options["output"], (str, Path, type(None))):
            handle = options.pop("output")
        elif isinstance(options.get("output"), Path):
            options["output"] = str(options["output"])
        loaded = ConfigLoader().load(config, overrides={"tuning": options} if options else None, profile=profile)
        values = loaded.section("tuning")
        if handle is not None:
            values["output"] = handle
        return cls(**values)

    def validate(self) -> None:
        """Raise `RevacConfigError` for inconsistent options."""
        for name in ("vectors", "parents", "h", "runs", "evaluations", "workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise RevacConfigError(f"'{name}' must be an integer, got {value!r}.", context={"key": name})
            if value < 1:
                raise RevacConfigError(f"'{name}' must be positive, got {value}.", context={"key": name})
        if self.parents > self.vectors:
            raise RevacConfigError(
                f"'parents' ({self.parents}) cannot exceed 'vectors' ({self.vectors}).",
                context={"parents": self.parents, "vectors": self.vectors},
            )
        if self.evaluations < self.vectors:
            raise RevacConfigError(
                f"'evaluations' ({self.evaluations}) must cover the initial population of {self.vectors} vectors.",
                context={"evaluations": self.evaluations, "vectors": self.vectors},
            )
        if self.evaluate not in EVALUATE_MODES:
            raise RevacConfigError(
                f"'evaluate' must be one of {EVALUATE_MODES}, got {self.evaluate!r}.",
                context={"key": "evaluate"},
            )

    def as_params(self) -> Dict[str, object]:
        params = {item.name: getattr(self, item.name) for item in fields(self)}
        if params["output"] is not None and not isinstance(params["output"], (str, Path)):
            params["output"] = "<stream>"
        return params


@dataclass
class TuningResult:
    """Outcome of a tuning run."""

    best: Dict[str, float]
    best_utility: float
    best_vector: np.ndarray = field(repr=False)
    evaluations: int
    history: List[float] = field(default_factory=list, repr=False)
    output: Optional[Union[str, Path, IO[str]]] = None


class RevacTuner:
    """Drive a single REVAC run over a parameter space."""

    def __init__(
        self,
        parameters: Union[ParameterSpace, Iterable[ParameterSpec]],
        objective: Objective,
        config: Optional[TuningConfig] = None,
        random: Optional[RandomSource] = None,
        experiment_logger: Optional[ExperimentLogger] = None,
        run_name: str = "revac-tuning",
    ) -> None:
        """Create a tuner.

        Parameters
        ----------
        parameters : ParameterSpace or iterable of ``(name, [min, max])``
            Tunable parameters; their order fixes the vector layout.
        objective : callable
            Performs one run of the meta-heuristic for ``{name: value}`` and
            returns its best fitness (lower is better).
        config : TuningConfig, optional
            Run options; defaults to `TuningConfig()`.
        random : RandomSource, optional
            Random source for every stochastic step.  Defaults to a numpy
            generator seeded with ``config.seed``.
        experiment_logger : ExperimentLogger, optional
            Receives per-evaluation metrics; tracking is off by default.
        run_name : str
            Name used for the tracked run.
        """
        self.parameters = parameters if isinstance(parameters, ParameterSpace) else ParameterSpace(parameters)
        if not callable(objective):
            raise RevacConfigError("The objective must be callable.")
        self.config = config or TuningConfig()
        self.config.validate()
        self.random = random or NumpyRandomSource(self.config.seed)
        self.logger = experiment_logger or ExperimentLogger(enabled=False)
        self.run_name = run_name
        self.evaluator = VectorEvaluator(self.parameters, objective, self.config.runs, self.config.workers)
        self.progress = ProgressLog(self.config.output, self.parameters.names)
        self.population = Population(self.parameters, self.config.vectors)
        self.evaluations = 0
        self.iterations = 0
        self.history: List[float] = []

    def _record(self, index: int, vector: np.ndarray, utility: float, best_utility: float) -> None:
        self.progress.append(index, vector, utility)
        self.history.append(best_utility)
        self.logger.log_metrics({"utility": utility, "best_utility": best_utility}, step=index)

    def _initialise(self) -> None:
        self.population.seed(self.random)

        def score(slot: int, vector: np.ndarray) -> float:
            utility = self.evaluator(vector)
            running_best = min(self.history[-1], utility) if self.history else utility
            self._record(self.evaluations, vector, utility, running_best)
            self.evaluations += 1
            return utility

        self.population.score(score)
        logger.debug("Initial population scored; best utility {}", self.population.best_utility)

    def step(self) -> float:
        """Run one steady-state generation and return the recorded utility."""
        config = self.config
        population = self.population

        parents = population.top_k(config.parents)
        child = crossover(self.random, parents)

        # Mutation must see the child already sitting in the oldest slot.
        slot = population.replace_oldest(child)
        population.table[slot] = mutate(self.random, population.table, slot, config.h)

        scored = child if config.evaluate == "child" else population.table[slot].copy()
        utility = self.evaluator(scored)
        population.record(slot, utility)

        self.iterations += 1
        self.evaluations += 1
        self._record(self.evaluations, scored, utility, population.best_utility)
        population.advance()
        logger.debug("Generation {}: {}", self.iterations, population.best_utility)
        return utility

    def run(self) -> TuningResult:
        """Execute the full run and return the best vector found."""
        self.progress.init()
        with self.logger.start_run(self.run_name, params=self.config.as_params()):
            self._initialise()
            while self.evaluations < self.config.evaluations:
                self.step()
            if isinstance(self.progress.sink, Path):
                self.logger.log_artifact(self.progress.sink)

        best_vector = self.population.best_vector
        assert best_vector is not None
        logger.info(
            "REVAC finished after {} evaluations; best utility {}",
            self.evaluations,
            self.population.best_utility,
        )
        return TuningResult(
            best=self.parameters.to_mapping(best_vector),
            best_utility=self.population.best_utility,
            best_vector=best_vector.copy(),
            evaluations=self.evaluations,
            history=list(self.history),
            output=self.config.output,
        )


def tune(
    parameters: Union[Mapping[str, Any], Iterable[ParameterSpec]],
    options: Optional[Mapping[str, Any]] = None,
    objective: Optional[Objective] = None,
    *,
    random: Optional[RandomSource] = None,
    profile: Optional[str] = None,
) -> Dict[str, float]:
    """Tune ``objective`` with REVAC and return the best ``{name: value}`` found.

    ``parameters`` is an ordered sequence of ``(name, [min, max])`` pairs (or an
    ordered mapping); ``options`` accepts the keys of the ``tuning`` section:
    vectors, parents, h, runs, evaluations, output, seed, evaluate, workers.
    """

    if objective is None:
        raise RevacConfigError("An objective function is required.")
    if isinstance(parameters, Mapping):
        space = ParameterSpace.from_mapping(parameters)
    else:
        space = ParameterSpace(parameters)
    config = TuningConfig.from_options(options, profile=profile)
    return RevacTuner(space, objective, config, random=random).run().best
