"""
Unified logging utilities that wrap Loguru and MLflow.

`ExperimentLogger` lets the tuner emit console output and tracking metrics
through one object.  Metrics and parameters are forwarded to MLflow when it is
installed, while Loguru handles console output.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from loguru import logger

try:
    import mlflow
except ImportError:  # pragma: no cover - tracking is optional.
    mlflow = None  # type: ignore[assignment]


class ExperimentLogger:
    """Thin convenience wrapper around Loguru and MLflow."""

    def __init__(
        self,
        experiment_name: str = "revac",
        tracking_uri: Optional[str] = None,
        enabled: bool = True,
    ) -> None:
        self.experiment_name = experiment_name
        self.tracking_uri = tracking_uri
        self.enabled = enabled and mlflow is not None

    def _ensure_mlflow(self) -> None:
        """Configure the MLflow tracking URI and experiment."""
        if self.tracking_uri:
            mlflow.set_tracking_uri(self.tracking_uri)
        mlflow.set_experiment(self.experiment_name)

    @contextmanager
    def start_run(self, run_name: str, params: Optional[Mapping[str, object]] = None) -> Iterator[None]:
        """
        Context manager that opens and closes an MLflow run while emitting log messages.

        When tracking is disabled the context still works, so callers rely on the
        same interface without extra guards.
        """

        logger.info("Starting REVAC run: {}", run_name)
        if self.enabled:
            self._ensure_mlflow()
            with mlflow.start_run(run_name=run_name):
                if params:
                    mlflow.log_params({key: str(value) for key, value in params.items()})
                yield
        else:
            yield
        logger.info("Completed REVAC run: {}", run_name)

    def log_metrics(self, metrics: Dict[str, float], step: Optional[int] = None) -> None:
        """Forward metrics to MLflow; a no-op when tracking is disabled."""
        if not self.enabled:
            return
        mlflow.log_metrics(metrics, step=step)

    def log_artifact(self, path: Path) -> None:
        """Record an artifact with MLflow when enabled."""
        if self.enabled and path.exists():
            mlflow.log_artifact(str(path))
