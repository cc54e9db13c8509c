"""
Post-run analysis of REVAC progress logs.

The trailing rows of a log approximate the final population (one row per
replaced slot).  The spread of each parameter over that window, relative to the
parameter's declared range, is the classic REVAC relevance signal: parameters
whose values collapsed to a narrow band matter, parameters still spread across
their whole range barely influence the utility.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

from revac.exceptions import RevacConfigError
from revac.tuning.parameter import ParameterSpace
from revac.tuning.progress import EVALUATION_COLUMN, UTILITY_COLUMN


def load_progress(path: Union[str, Path]) -> pd.DataFrame:
    """Read a progress log, checking its ``Evaluation ... Utility`` layout."""

    frame = pd.read_csv(path)
    columns = list(frame.columns)
    if len(columns) < 3 or columns[0] != EVALUATION_COLUMN or columns[-1] != UTILITY_COLUMN:
        raise RevacConfigError(
            f"Not a REVAC progress log: {path}",
            context={"columns": columns},
        )
    return frame


def parameter_columns(frame: pd.DataFrame) -> list:
    return [column for column in frame.columns if column not in (EVALUATION_COLUMN, UTILITY_COLUMN)]


def best_so_far(frame: pd.DataFrame) -> pd.Series:
    """Cumulative minimum utility indexed by evaluation."""

    return frame.set_index(EVALUATION_COLUMN)[UTILITY_COLUMN].cummin()


def summarize_progress(
    frame: pd.DataFrame,
    parameters: Optional[ParameterSpace] = None,
    window: Optional[int] = None,
) -> Dict[str, Any]:
    """Summarise a progress log.

    Parameters
    ----------
    frame : pandas.DataFrame
        Output of `load_progress`.
    parameters : ParameterSpace, optional
        Declared ranges; enables the per-parameter relevance estimate.
    window : int, optional
        Number of trailing rows treated as the final population.  Defaults to a
        tenth of the log, at least one row.

    Returns
    -------
    dict
        ``evaluations``, ``best`` (row with the lowest utility), ``final_utility``
        (mean over the window), and ``parameters`` with per-parameter statistics.
    """

    if frame.empty:
        raise RevacConfigError("Progress log contains no evaluations.")
    names = parameter_columns(frame)
    window = window or max(1, len(frame) // 10)
    tail = frame.tail(window)

    best_row = frame.loc[frame[UTILITY_COLUMN].idxmin()]
    stats: Dict[str, Dict[str, float]] = {}
    for name in names:
        low, high = float(tail[name].min()), float(tail[name].max())
        entry = {
            "mean": float(tail[name].mean()),
            "std": float(tail[name].std(ddof=0)),
            "min": low,
            "max": high,
        }
        if parameters is not None:
            declared = next((p for p in parameters if p.name == name), None)
            if declared is not None and declared.width > 0:
                entry["relevance"] = 1.0 - (high - low) / declared.width
        stats[name] = entry

    return {
        "evaluations": int(len(frame)),
        "window": int(window),
        "best": {
            "evaluation": int(best_row[EVALUATION_COLUMN]),
            "utility": float(best_row[UTILITY_COLUMN]),
            "values": {name: float(best_row[name]) for name in names},
        },
        "final_utility": float(tail[UTILITY_COLUMN].mean()),
        "parameters": stats,
    }
