"""Tests for progress log analysis."""

from pathlib import Path

import pandas as pd
import pytest

from revac import RevacConfigError, RevacTuner, TuningConfig
from revac.reporting import best_so_far, load_progress, summarize_progress
from revac.tuning import ParameterSpace


def _write_log(path: Path) -> None:
    pd.DataFrame(
        {
            "Evaluation": [0, 1, 2, 4, 5],
            "a": [0.1, 0.9, 0.5, 0.45, 0.55],
            "b": [-4.0, 4.0, 0.0, -3.0, 3.0],
            "Utility": [3.0, 5.0, 1.0, 2.0, 0.5],
        }
    ).to_csv(path, index=False)


def test_best_so_far_is_cumulative_minimum(tmp_path: Path) -> None:
    path = tmp_path / "progress.csv"
    _write_log(path)
    series = best_so_far(load_progress(path))
    assert series.tolist() == [3.0, 3.0, 1.0, 1.0, 0.5]
    assert series.index.tolist() == [0, 1, 2, 4, 5]


def test_summary_reports_best_row_and_relevance(tmp_path: Path) -> None:
    path = tmp_path / "progress.csv"
    _write_log(path)
    space = ParameterSpace([("a", [0, 1]), ("b", [-5, 5])])
    summary = summarize_progress(load_progress(path), space, window=2)
    assert summary["best"] == {"evaluation": 5, "utility": 0.5, "values": {"a": 0.55, "b": 3.0}}
    assert summary["final_utility"] == pytest.approx(1.25)
    assert summary["parameters"]["a"]["relevance"] == pytest.approx(0.9)
    assert summary["parameters"]["b"]["relevance"] == pytest.approx(0.4)


def test_load_progress_rejects_foreign_csv(tmp_path: Path) -> None:
    path = tmp_path / "other.csv"
    path.write_text("x,y\n1,2\n", encoding="utf-8")
    with pytest.raises(RevacConfigError):
        load_progress(path)


def test_summary_of_a_real_run(tmp_path: Path) -> None:
    path = tmp_path / "progress.csv"
    config = TuningConfig(vectors=8, parents=4, h=2, runs=1, evaluations=60, output=str(path), seed=4)
    RevacTuner([("x", [0, 10])], lambda v: abs(v["x"] - 3.0), config).run()
    summary = summarize_progress(load_progress(path))
    assert summary["evaluations"] == 60
    assert summary["window"] == 6
    assert 0.0 <= summary["parameters"]["x"]["min"] <= summary["parameters"]["x"]["max"] <= 10.0
