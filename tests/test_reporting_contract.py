"""
placements.json / run_metadata.json shape, and end-to-end runs of the CLI and
the smoke entrypoint into a temporary directory.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from maplabel.core import smoke
from maplabel.core.labeler import Labeler
from maplabel.core.reporting import (
    ensure_report_dir,
    placements_to_dict,
    write_placements_json,
    write_run_metadata_json,
)
from maplabel.core.runner import main as runner_main
from maplabel.core.types import Anchor, Label, PlacementState, Weights

REQUIRED_KEYS = ["schema_version", "labels", "anchors", "bounds", "weights", "metrics"]


def _state() -> PlacementState:
    return PlacementState(
        labels=[Label(0, 0, 10, 4, text="A"), Label(3, 0, 13, 4, text="B")],
        anchors=[Anchor(0, 0), Anchor(3, 0)],
    )


def test_placements_to_dict_shape() -> None:
    data = placements_to_dict(_state(), Weights())
    for key in REQUIRED_KEYS:
        assert key in data, f"Missing key: {key}"
    assert data["labels"][1] == {"index": 1, "text": "B", "xmin": 3, "ymin": 0, "xmax": 13, "ymax": 4}
    assert data["bounds"] is None
    assert "run" not in data
    json.dumps(data)


def test_write_reports_after_run(tmp_path: Path) -> None:
    state = _state()
    labeler = Labeler(state.labels, state.anchors, seed=5)
    stats = labeler.run(20)
    report_dir = ensure_report_dir(tmp_path, "unit")
    assert report_dir == (tmp_path / "reports" / "unit").resolve()
    p = write_placements_json(report_dir, labeler.state, labeler.weights, stats)
    m = write_run_metadata_json(report_dir, "unit", "<memory>", 20, 5)
    data = json.loads(p.read_text(encoding="utf-8"))
    assert data["run"]["sweeps_completed"] == 20
    assert data["run"]["accepted"] + data["run"]["rejected"] == 40
    meta = json.loads(m.read_text(encoding="utf-8"))
    assert meta["nsweeps"] == 20 and meta["seed"] == 5
    assert "timestamp_utc" in meta and "config" in meta


def test_runner_end_to_end(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    problem = tmp_path / "problem.json"
    problem.write_text(json.dumps({
        "labels": [
            {"text": "A", "xmin": 0, "ymin": 0, "xmax": 10, "ymax": 4},
            {"text": "B", "xmin": 3, "ymin": 0, "xmax": 13, "ymax": 4},
        ],
        "anchors": [{"x": 0, "y": 0}, {"x": 3, "y": 0}],
        "bounds": [-30, -30, 40, 40],
    }), encoding="utf-8")
    code = runner_main([
        "problem.json", "--sweeps", "50", "--seed", "1",
        "--repo-root", str(tmp_path), "--run-name", "cli",
    ])
    assert code == 0
    out_dir = tmp_path / "reports" / "cli"
    data = json.loads((out_dir / "placements.json").read_text(encoding="utf-8"))
    assert data["metrics"]["out_of_bounds"] == 0
    assert data["metrics"]["total_label_overlap"] <= data["initial_metrics"]["total_label_overlap"]
    assert (out_dir / "run_metadata.json").exists()
    printed = capsys.readouterr().out
    assert "placements.json" in printed


def test_runner_reports_config_error(tmp_path: Path) -> None:
    problem = tmp_path / "problem.json"
    problem.write_text(json.dumps({
        "labels": [{"xmin": 0, "ymin": 0, "xmax": 1, "ymax": 1}],
        "anchors": [{"x": 0, "y": 0}, {"x": 1, "y": 1}],
    }), encoding="utf-8")
    code = runner_main([str(problem), "--repo-root", str(tmp_path)])
    assert code == 2
    assert not (tmp_path / "reports").exists()


def test_smoke_main_writes_reports(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    smoke.main()
    data = json.loads((tmp_path / "reports" / "smoke" / "placements.json").read_text(encoding="utf-8"))
    assert data["metrics"]["total_label_overlap"] < data["initial_metrics"]["total_label_overlap"]
