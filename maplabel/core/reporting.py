# maplabel/core/reporting.py
"""
Create reports/<run_name>/ and write placements.json and run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from maplabel.core.config import (
    DEFAULT_ANCHOR_RADIUS,
    INITIAL_TEMPERATURE,
    MAX_ANGLE,
    MAX_MOVE,
    REFERENCE_CORNER,
    REPORTS_DIR,
    ROTATE_PROBABILITY,
    SEED,
)
from maplabel.core.energy import OrientationRule
from maplabel.core.scoring import placement_metrics
from maplabel.core.types import PlacementState, RunStats, Weights


def placements_to_dict(
    state: PlacementState,
    weights: Weights,
    stats: RunStats | None = None,
    initial_metrics: dict[str, float] | None = None,
    orientation_rule: OrientationRule | None = None,
) -> dict:
    """Structure for placements.json: labels, anchors, bounds, metrics, run stats."""
    out = {
        "schema_version": "1.0",
        "labels": [
            {
                "index": i,
                "text": lab.text,
                "xmin": lab.xmin,
                "ymin": lab.ymin,
                "xmax": lab.xmax,
                "ymax": lab.ymax,
            }
            for i, lab in enumerate(state.labels)
        ],
        "anchors": [{"x": a.x, "y": a.y, "radius": a.radius} for a in state.anchors],
        "bounds": list(state.bounds) if state.bounds is not None else None,
        "n_obstacles": len(state.obstacles),
        "weights": weights.as_dict(),
        "metrics": placement_metrics(state, weights, orientation_rule),
    }
    if initial_metrics is not None:
        out["initial_metrics"] = initial_metrics
    if stats is not None:
        run = asdict(stats)
        run["acceptance_rate"] = stats.acceptance_rate
        out["run"] = run
    return out


def run_metadata_dict(
    run_name: str,
    problem_path: str,
    nsweeps: int,
    seed: int | None,
    max_move: float,
    max_angle: float,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "problem_path": problem_path,
        "nsweeps": nsweeps,
        "seed": seed,
        "max_move": max_move,
        "max_angle": max_angle,
        "config": {
            "MAX_MOVE": MAX_MOVE,
            "MAX_ANGLE": MAX_ANGLE,
            "INITIAL_TEMPERATURE": INITIAL_TEMPERATURE,
            "ROTATE_PROBABILITY": ROTATE_PROBABILITY,
            "DEFAULT_ANCHOR_RADIUS": DEFAULT_ANCHOR_RADIUS,
            "REFERENCE_CORNER": REFERENCE_CORNER,
            "SEED": SEED,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def write_placements_json(
    report_dir: Path,
    state: PlacementState,
    weights: Weights,
    stats: RunStats | None = None,
    initial_metrics: dict[str, float] | None = None,
    orientation_rule: OrientationRule | None = None,
) -> Path:
    """Write placements.json to report_dir. Returns path to file."""
    path = report_dir / "placements.json"
    data = placements_to_dict(state, weights, stats, initial_metrics, orientation_rule)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    problem_path: str,
    nsweeps: int,
    seed: int | None,
    max_move: float = MAX_MOVE,
    max_angle: float = MAX_ANGLE,
) -> Path:
    """Write run_metadata.json to report_dir."""
    path = report_dir / "run_metadata.json"
    data = run_metadata_dict(run_name, problem_path, nsweeps, seed, max_move, max_angle)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
