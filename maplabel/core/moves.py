# maplabel/core/moves.py
"""
Monte Carlo moves on a single randomly chosen label: rigid translation and
rotation about the label's anchor. Both mutate in place and return a MoveRecord
that revert() uses to restore the exact pre-move corners.
"""

from __future__ import annotations

import numpy as np

from maplabel.core.geometry import rotate_about
from maplabel.core.types import MoveRecord, PlacementState


def pick_label(state: PlacementState, rng: np.random.Generator) -> int:
    """Uniform index in [0, N). Independent per call, no shuffling."""
    return int(rng.integers(len(state.labels)))


def translate_label(state: PlacementState, index: int, dx: float, dy: float) -> MoveRecord:
    label = state.labels[index]
    record = MoveRecord(index=index, kind="translate", old_extent=label.extent)
    label.xmin += dx
    label.xmax += dx
    label.ymin += dy
    label.ymax += dy
    return record


def rotate_label(state: PlacementState, index: int, angle_rad: float) -> MoveRecord:
    """
    Orbit the label's min corner about its anchor center by angle_rad, then
    re-add the original width and height. The box stays axis-aligned.
    """
    label = state.labels[index]
    record = MoveRecord(index=index, kind="rotate", old_extent=label.extent)
    ax, ay = state.anchors[index].center
    width = (label.xmax - ax) - (label.xmin - ax)
    height = (label.ymax - ay) - (label.ymin - ay)
    x_new, y_new = rotate_about(label.xmin, label.ymin, (ax, ay), angle_rad)
    label.xmin = x_new
    label.ymin = y_new
    label.xmax = x_new + width
    label.ymax = y_new + height
    return record


def translate_move(
    state: PlacementState,
    rng: np.random.Generator,
    max_move: float,
    index: int | None = None,
) -> MoveRecord:
    """Shift one label by dx, dy uniform in [-max_move/2, max_move/2]. Random label if index is None."""
    if index is None:
        index = pick_label(state, rng)
    dx = (rng.random() - 0.5) * max_move
    dy = (rng.random() - 0.5) * max_move
    return translate_label(state, index, dx, dy)


def rotate_move(
    state: PlacementState,
    rng: np.random.Generator,
    max_angle: float,
    index: int | None = None,
) -> MoveRecord:
    """Rotate one label by an angle uniform in [-max_angle/2, max_angle/2] radians."""
    if index is None:
        index = pick_label(state, rng)
    angle = (rng.random() - 0.5) * max_angle
    return rotate_label(state, index, angle)


def revert(state: PlacementState, record: MoveRecord) -> None:
    state.labels[record.index].set_extent(record.old_extent)
