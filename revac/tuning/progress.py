"""
Progress log for tuning runs.

Each scored vector is appended as one CSV row ``Evaluation, <params...>,
Utility``.  Rows are written and flushed one at a time so a long run can be
inspected while it is still in progress.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, List, Optional, Sequence, Union

import pandas as pd
from loguru import logger

Sink = Union[str, Path, IO[str]]

EVALUATION_COLUMN = "Evaluation"
UTILITY_COLUMN = "Utility"


def header_for(parameter_names: Sequence[str]) -> List[str]:
    return [EVALUATION_COLUMN, *parameter_names, UTILITY_COLUMN]


class ProgressLog:
    """Append-only CSV sink for (evaluation, vector, utility) records."""

    def __init__(self, sink: Optional[Sink], parameter_names: Sequence[str]) -> None:
        self.sink = Path(sink) if isinstance(sink, str) else sink
        self.columns = header_for(parameter_names)
        self.rows = 0

    @property
    def enabled(self) -> bool:
        return self.sink is not None

    def _write(self, frame: pd.DataFrame, *, header: bool, mode: str) -> None:
        if isinstance(self.sink, Path):
            frame.to_csv(self.sink, mode=mode, header=header, index=False)
            return
        frame.to_csv(self.sink, header=header, index=False)
        self.sink.flush()  # type: ignore[union-attr]

    def init(self) -> None:
        """Truncate the sink and write the header row."""
        if self.sink is None:
            logger.debug("No progress log configured; rows will not be persisted.")
            return
        if isinstance(self.sink, Path):
            self.sink.parent.mkdir(parents=True, exist_ok=True)
        elif self.sink.seekable():
            self.sink.seek(0)
            self.sink.truncate()
        self._write(pd.DataFrame(columns=self.columns), header=True, mode="w")
        self.rows = 0

    def append(self, evaluation: int, vector: Sequence[float], utility: float) -> None:
        """Append one row for a scored vector."""
        if self.sink is None:
            return
        row = [int(evaluation), *(float(v) for v in vector), float(utility)]
        if len(row) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns) - 2} vector components, got {len(vector)}")
        self._write(pd.DataFrame([row], columns=self.columns), header=False, mode="a")
        self.rows += 1
