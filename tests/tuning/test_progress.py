"""Tests for the CSV progress log."""

import io

import pandas as pd

from revac.tuning import ProgressLog


def test_init_truncates_and_writes_header(tmp_path) -> None:
    path = tmp_path / "progress.csv"
    path.write_text("stale content\n", encoding="utf-8")
    log = ProgressLog(str(path), ["a", "b"])
    log.init()
    assert path.read_text(encoding="utf-8").splitlines() == ["Evaluation,a,b,Utility"]


def test_rows_are_visible_after_each_append(tmp_path) -> None:
    path = tmp_path / "nested" / "progress.csv"
    log = ProgressLog(path, ["a", "b"])
    log.init()
    log.append(0, [0.5, -1.0], 2.25)
    assert len(pd.read_csv(path)) == 1
    log.append(2, [0.25, 3.0], 1.5)
    frame = pd.read_csv(path)
    assert list(frame.columns) == ["Evaluation", "a", "b", "Utility"]
    assert frame["Evaluation"].tolist() == [0, 2]
    assert frame["Utility"].tolist() == [2.25, 1.5]
    assert log.rows == 2


def test_stream_sink_is_flushed_per_row() -> None:
    buffer = io.StringIO()
    buffer.write("old")
    log = ProgressLog(buffer, ["x"])
    log.init()
    log.append(0, [7.0], 0.0)
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "Evaluation,x,Utility"
    assert lines[1].startswith("0,7.0,0.0")


def test_disabled_log_is_a_no_op() -> None:
    log = ProgressLog(None, ["x"])
    log.init()
    log.append(0, [1.0], 1.0)
    assert not log.enabled
    assert log.rows == 0
