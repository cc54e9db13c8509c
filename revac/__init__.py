"""REVAC: Relevance Estimation and Value Calibration of meta-heuristic parameters."""

from .exceptions import RevacConfigError, RevacError, RevacRuntimeError
from .tuning import ParameterSpace, RevacTuner, TuningConfig, TuningResult, tune

__version__ = "0.1.0"

__all__ = [
    "RevacError",
    "RevacConfigError",
    "RevacRuntimeError",
    "ParameterSpace",
    "RevacTuner",
    "TuningConfig",
    "TuningResult",
    "tune",
]
