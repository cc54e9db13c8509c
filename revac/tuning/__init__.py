"""Tuning module exports."""

from .engine import RevacTuner, TuningConfig, TuningResult, tune
from .evaluator import VectorEvaluator, evaluate_vector
from .operators import crossover, mutate, mutation_window
from .parameter import Parameter, ParameterSpace
from .population import Population
from .progress import ProgressLog
from .random_source import NumpyRandomSource, RandomSource

__all__ = [
    "RevacTuner",
    "TuningConfig",
    "TuningResult",
    "tune",
    "VectorEvaluator",
    "evaluate_vector",
    "crossover",
    "mutate",
    "mutation_window",
    "Parameter",
    "ParameterSpace",
    "Population",
    "ProgressLog",
    "NumpyRandomSource",
    "RandomSource",
]
