# maplabel/core/smoke.py
"""
Single entrypoint to verify annealing end-to-end: two overlapping labels,
default parameters, reports written to reports/smoke/. Does not run on import.
"""

from __future__ import annotations

import logging
from pathlib import Path

from maplabel.core.config import LOG_LEVEL, N_SWEEPS, SEED
from maplabel.core.labeler import Labeler
from maplabel.core.reporting import (
    ensure_report_dir,
    write_placements_json,
    write_run_metadata_json,
)
from maplabel.core.scoring import placement_metrics
from maplabel.core.types import Anchor, Label, PlacementState


def smoke_state() -> PlacementState:
    """Two 10x4 labels overlapping by 7x4, anchors at (0, 0) and (3, 0)."""
    return PlacementState(
        labels=[
            Label(0.0, 0.0, 10.0, 4.0, text="A"),
            Label(3.0, 0.0, 13.0, 4.0, text="B"),
        ],
        anchors=[Anchor(0.0, 0.0, radius=2.0), Anchor(3.0, 0.0, radius=2.0)],
    )


def main() -> None:
    """Anneal the smoke problem and write placements.json / run_metadata.json."""
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path.cwd().resolve()
    state = smoke_state()
    labeler = Labeler(state.labels, state.anchors, seed=SEED)
    before = placement_metrics(labeler.state, labeler.weights)
    stats = labeler.run(N_SWEEPS)

    report_dir = ensure_report_dir(repo_root, "smoke")
    write_placements_json(report_dir, labeler.state, labeler.weights, stats, initial_metrics=before)
    write_run_metadata_json(report_dir, "smoke", "<built-in>", N_SWEEPS, SEED)


if __name__ == "__main__":
    main()
