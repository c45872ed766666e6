# maplabel/core/energy.py
"""
Energy of one label's placement: anchor distance, label-label overlap,
label-anchor overlap, obstacle overlap and an orientation slot. Lower is better.
Pure read of the placement state.
"""

from __future__ import annotations

from typing import Callable

from maplabel.core.config import OBSTACLE_CONTACT_UNIT, REFERENCE_CORNER
from maplabel.core.geometry import (
    extent_bounds,
    extent_to_polygon,
    extents_intersect,
    intersection_area,
    point_distance,
)
from maplabel.core.types import Anchor, Label, PlacementState, Weights

OrientationRule = Callable[[Label, Anchor], float]


def no_orientation_preference(label: Label, anchor: Anchor) -> float:
    return 0.0


def prefer_above_right(label: Label, anchor: Anchor) -> float:
    """1 for a label reaching left of its anchor, 1 more for reaching below it."""
    penalty = 0.0
    if label.xmin < anchor.x:
        penalty += 1.0
    if label.ymin < anchor.y:
        penalty += 1.0
    return penalty


def reference_corner(label: Label, corner: str = REFERENCE_CORNER) -> tuple[float, float]:
    """Attachment point of a label: (xmin, ymax) or (xmin, ymin)."""
    if corner == "xmin_ymax":
        return (label.xmin, label.ymax)
    if corner == "xmin_ymin":
        return (label.xmin, label.ymin)
    raise ValueError(f"Unknown reference corner: {corner!r}")


def anchor_distance_term(
    state: PlacementState, index: int, weights: Weights, corner: str = REFERENCE_CORNER
) -> float:
    corner_pt = reference_corner(state.labels[index], corner)
    return point_distance(corner_pt, state.anchors[index].center) * weights.length


def label_overlap_term(state: PlacementState, index: int, weights: Weights) -> float:
    ext = state.labels[index].extent
    total = 0.0
    for j, other in enumerate(state.labels):
        if j == index:
            continue
        other_ext = other.extent
        if extents_intersect(ext, other_ext):
            total += intersection_area(ext, other_ext) * weights.label_overlap
    return total


def anchor_overlap_term(state: PlacementState, index: int, weights: Weights) -> float:
    ext = state.labels[index].extent
    total = 0.0
    for j, anchor in enumerate(state.anchors):
        if j == index:
            continue
        if anchor.intersects_extent(ext):
            total += intersection_area(anchor.extent, ext) * weights.label_anchor
    return total


def obstacle_overlap_size(obstacle, label_poly) -> float:
    """
    Size of the obstacle's overlap with a label box: area for areal contact,
    clipped length for lines or polygon edges, OBSTACLE_CONTACT_UNIT for points.
    0 when the two do not touch.
    """
    if not obstacle.intersects(label_poly):
        return 0.0
    overlap = obstacle.intersection(label_poly)
    if overlap.area > 0:
        return float(overlap.area)
    if overlap.length > 0:
        return float(overlap.length)
    return OBSTACLE_CONTACT_UNIT


def obstacle_term(state: PlacementState, index: int, weights: Weights) -> float:
    if not state.obstacles:
        return 0.0
    ext = state.labels[index].extent
    label_poly = None
    total = 0.0
    for obstacle in state.obstacles:
        # fast check on extents, exact overlap on the geometry
        if not extents_intersect(ext, extent_bounds(obstacle)):
            continue
        if label_poly is None:
            label_poly = extent_to_polygon(ext)
        total += obstacle_overlap_size(obstacle, label_poly) * weights.label_anchor
    return total


def orientation_term(
    state: PlacementState,
    index: int,
    weights: Weights,
    rule: OrientationRule | None = None,
) -> float:
    if rule is None or weights.orientation == 0:
        return 0.0
    return rule(state.labels[index], state.anchors[index]) * weights.orientation


def energy(
    state: PlacementState,
    index: int,
    weights: Weights,
    orientation_rule: OrientationRule | None = None,
    corner: str = REFERENCE_CORNER,
) -> float:
    """
    Cost of labels[index] against all other labels, anchors and obstacles.
    O(N + obstacles) per call. weights.intersection is not read by any term.
    """
    return (
        anchor_distance_term(state, index, weights, corner)
        + label_overlap_term(state, index, weights)
        + anchor_overlap_term(state, index, weights)
        + obstacle_term(state, index, weights)
        + orientation_term(state, index, weights, orientation_rule)
    )
