# maplabel/core/validate.py
"""
One-time setup validation. Fails fast with LabelerConfigError instead of letting
NaNs or index errors leak into the energy sums.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Sequence

from maplabel.core import error_codes
from maplabel.core.geometry import extent_is_finite, extent_is_ordered
from maplabel.core.types import Anchor, Extent, Label, Weights


class LabelerConfigError(ValueError):
    """Caller-contract violation detected at setup. code is a key from error_codes."""

    def __init__(self, code: str, detail: str) -> None:
        super().__init__(f"{error_codes.user_message(code)} ({detail})")
        self.code = code
        self.detail = detail


def validate_labels(labels: Sequence[Label]) -> None:
    if not labels:
        raise LabelerConfigError(error_codes.NO_LABELS, "labels is empty")
    for i, lab in enumerate(labels):
        ext = lab.extent
        if not extent_is_finite(ext):
            raise LabelerConfigError(error_codes.NON_FINITE_LABEL, f"label {i}: {ext}")
        if not extent_is_ordered(ext):
            raise LabelerConfigError(error_codes.DEGENERATE_LABEL, f"label {i}: {ext}")


def validate_anchors(anchors: Sequence[Anchor], n_labels: int) -> None:
    if len(anchors) != n_labels:
        raise LabelerConfigError(
            error_codes.LABEL_ANCHOR_MISMATCH,
            f"{n_labels} labels vs {len(anchors)} anchors",
        )
    for i, anc in enumerate(anchors):
        if not (math.isfinite(anc.x) and math.isfinite(anc.y) and math.isfinite(anc.radius)):
            raise LabelerConfigError(error_codes.INVALID_ANCHOR, f"anchor {i}: {anc}")
        if anc.radius < 0:
            raise LabelerConfigError(error_codes.INVALID_ANCHOR, f"anchor {i}: radius {anc.radius}")


def validate_bounds(bounds: Extent | None) -> None:
    if bounds is None:
        return
    if len(bounds) != 4:
        raise LabelerConfigError(error_codes.INVALID_BOUNDS, f"expected 4 values, got {len(bounds)}")
    if not extent_is_finite(bounds) or not extent_is_ordered(bounds):
        raise LabelerConfigError(error_codes.INVALID_BOUNDS, str(tuple(bounds)))


def validate_obstacles(obstacles: Sequence[Any]) -> None:
    for i, obs in enumerate(obstacles):
        if not hasattr(obs, "bounds") or not all(
            callable(getattr(obs, name, None)) for name in ("intersects", "intersection")
        ):
            raise LabelerConfigError(error_codes.INVALID_OBSTACLE, f"obstacle {i}: {type(obs).__name__}")


def validate_weights(weights: Weights) -> None:
    for name, value in weights.as_dict().items():
        if not math.isfinite(value) or value < 0:
            raise LabelerConfigError(error_codes.INVALID_WEIGHT, f"{name}={value}")


def validate_run_params(max_move: float, max_angle: float, initial_temperature: float) -> None:
    for name, value in (("max_move", max_move), ("max_angle", max_angle)):
        if not math.isfinite(value) or value < 0:
            raise LabelerConfigError(error_codes.INVALID_RUN_PARAM, f"{name}={value}")
    if not math.isfinite(initial_temperature) or initial_temperature <= 0:
        raise LabelerConfigError(
            error_codes.INVALID_RUN_PARAM, f"initial_temperature={initial_temperature}"
        )


def validate_nsweeps(nsweeps: int) -> None:
    if isinstance(nsweeps, bool) or not isinstance(nsweeps, numbers.Integral) or nsweeps < 0:
        raise LabelerConfigError(error_codes.INVALID_RUN_PARAM, f"nsweeps={nsweeps!r}")


def validate_setup(
    labels: Sequence[Label],
    anchors: Sequence[Anchor],
    bounds: Extent | None,
    obstacles: Sequence[Any],
    weights: Weights,
    max_move: float,
    max_angle: float,
    initial_temperature: float,
) -> None:
    """
    Check every caller contract once, before the first sweep.
    Raises LabelerConfigError on the first violation found.
    """
    validate_labels(labels)
    validate_anchors(anchors, len(labels))
    validate_bounds(bounds)
    validate_obstacles(obstacles)
    validate_weights(weights)
    validate_run_params(max_move, max_angle, initial_temperature)


def validate_move_options(corner: str, rotate_probability: float) -> None:
    if corner not in ("xmin_ymax", "xmin_ymin"):
        raise LabelerConfigError(error_codes.INVALID_RUN_PARAM, f"corner={corner!r}")
    if not 0.0 <= rotate_probability <= 1.0:
        raise LabelerConfigError(
            error_codes.INVALID_RUN_PARAM, f"rotate_probability={rotate_probability}"
        )
