"""
Centralised exception hierarchy for REVAC.

Tuning runs fail fast: configuration problems are reported before the first
evaluation, while errors raised by the objective function or the progress log
propagate untouched and abort the run.
"""

from __future__ import annotations

from typing import Any


class RevacError(Exception):
    """Base class for all REVAC specific exceptions."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = context or {}


class RevacConfigError(RevacError):
    """Raised for invalid parameters, options, or configuration sources."""


class RevacRuntimeError(RevacError):
    """Raised when a tuning run cannot continue, e.g. a non-numeric fitness."""


__all__ = [
    "RevacError",
    "RevacConfigError",
    "RevacRuntimeError",
]
