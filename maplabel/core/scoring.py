# maplabel/core/scoring.py
"""
Placement quality metrics for reports: total energy, overlap areas, out-of-bounds
count, anchor distances. Read-only over a PlacementState.
"""

from __future__ import annotations

from maplabel.core.acceptance import within_bounds
from maplabel.core.config import REFERENCE_CORNER
from maplabel.core.energy import OrientationRule, energy, reference_corner
from maplabel.core.geometry import intersection_area, point_distance
from maplabel.core.types import Label, PlacementState, Weights


def overlap_area(a: Label, b: Label) -> float:
    """Overlap of two label boxes; overlap_area(a, b) == overlap_area(b, a)."""
    return intersection_area(a.extent, b.extent)


def overlapping_pairs(state: PlacementState) -> list[tuple[int, int]]:
    """Index pairs (i < j) whose boxes overlap with positive area."""
    labels = state.labels
    out: list[tuple[int, int]] = []
    for i in range(len(labels)):
        for j in range(i + 1, len(labels)):
            if overlap_area(labels[i], labels[j]) > 0:
                out.append((i, j))
    return out


def total_label_overlap(state: PlacementState) -> float:
    """Sum of pairwise overlap areas, each unordered pair counted once."""
    labels = state.labels
    total = 0.0
    for i in range(len(labels)):
        for j in range(i + 1, len(labels)):
            total += overlap_area(labels[i], labels[j])
    return total


def total_energy(
    state: PlacementState,
    weights: Weights,
    orientation_rule: OrientationRule | None = None,
    corner: str = REFERENCE_CORNER,
) -> float:
    """Sum of per-label energies. Pairwise terms appear once from each side."""
    return sum(
        energy(state, i, weights, orientation_rule, corner) for i in range(len(state.labels))
    )


def out_of_bounds_count(state: PlacementState) -> int:
    return sum(1 for lab in state.labels if not within_bounds(lab.extent, state.bounds))


def mean_anchor_distance(state: PlacementState, corner: str = REFERENCE_CORNER) -> float:
    if not state.labels:
        return 0.0
    dists = [
        point_distance(reference_corner(lab, corner), anc.center)
        for lab, anc in zip(state.labels, state.anchors)
    ]
    return sum(dists) / len(dists)


def placement_metrics(
    state: PlacementState,
    weights: Weights,
    orientation_rule: OrientationRule | None = None,
    corner: str = REFERENCE_CORNER,
) -> dict[str, float]:
    """Metrics snapshot for placements.json."""
    return {
        "total_energy": total_energy(state, weights, orientation_rule, corner),
        "total_label_overlap": total_label_overlap(state),
        "overlapping_pairs": len(overlapping_pairs(state)),
        "out_of_bounds": out_of_bounds_count(state),
        "mean_anchor_distance": mean_anchor_distance(state, corner),
    }
