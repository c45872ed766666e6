"""
Energy terms: anchor distance, label-label and label-anchor overlap, obstacles,
orientation slot. Hand-computed expectations on small configurations.
"""

from __future__ import annotations

import math

import pytest
from shapely.geometry import LineString, Point, Polygon, box

from maplabel.core.config import DEFAULT_ANCHOR_RADIUS
from maplabel.core.energy import (
    anchor_distance_term,
    anchor_overlap_term,
    energy,
    label_overlap_term,
    obstacle_term,
    orientation_term,
    prefer_above_right,
    reference_corner,
)
from maplabel.core.types import Anchor, Label, PlacementState, Weights

LENGTH_ONLY = Weights(length=0.2, intersection=0.0, label_overlap=0.0, label_anchor=0.0, orientation=0.0)


def _two_overlapping() -> PlacementState:
    return PlacementState(
        labels=[Label(0, 0, 10, 4), Label(3, 0, 13, 4)],
        anchors=[Anchor(0, 0), Anchor(3, 0)],
    )


def test_reference_corner() -> None:
    lab = Label(1, 2, 11, 6)
    assert reference_corner(lab) == (1, 6)
    assert reference_corner(lab, "xmin_ymin") == (1, 2)
    with pytest.raises(ValueError):
        reference_corner(lab, "center")


def test_energy_length_only_is_proportional_to_anchor_distance() -> None:
    state = PlacementState(
        labels=[Label(1, 1, 5, 3), Label(20, 20, 24, 22)],
        anchors=[Anchor(0, 0), Anchor(19, 18)],
    )
    for i in range(2):
        e = energy(state, i, LENGTH_ONLY)
        corner = reference_corner(state.labels[i])
        dist = math.dist(corner, state.anchors[i].center)
        assert e >= 0
        assert e == pytest.approx(0.2 * dist)


def test_energy_zero_when_label_corner_on_anchor() -> None:
    state = PlacementState(labels=[Label(0, -4, 10, 0)], anchors=[Anchor(0, 0)])
    assert energy(state, 0, Weights()) == 0.0


def test_label_overlap_term() -> None:
    state = _two_overlapping()
    w = Weights()
    assert label_overlap_term(state, 0, w) == pytest.approx(28 * 30.0)


def test_label_overlap_contribution_is_symmetric() -> None:
    state = PlacementState(
        labels=[Label(0.3, 0.1, 7.7, 3.9), Label(2.2, -1.4, 9.6, 2.5)],
        anchors=[Anchor(0, 0), Anchor(5, 5)],
    )
    w = Weights()
    assert label_overlap_term(state, 0, w) == label_overlap_term(state, 1, w)
    assert label_overlap_term(state, 0, w) > 0


def test_anchor_overlap_term_uses_other_anchors_only() -> None:
    state = PlacementState(
        labels=[Label(0, 0, 10, 4), Label(30, 30, 40, 34)],
        anchors=[Anchor(0, 0, radius=2.0), Anchor(3, 0, radius=2.0)],
    )
    w = Weights()
    # anchor 1 extent (1, -2, 5, 2) against label 0 -> 4 x 2
    assert anchor_overlap_term(state, 0, w) == pytest.approx(8 * 30.0)
    # label 1 is far from anchor 0
    assert anchor_overlap_term(state, 1, w) == 0.0


def test_anchor_overlap_skipped_when_circle_misses_box() -> None:
    # circle extent overlaps the box corner but the circle itself does not
    state = PlacementState(
        labels=[Label(0.8, 0.8, 5, 5), Label(50, 50, 51, 51)],
        anchors=[Anchor(50, 50), Anchor(0, 0, radius=1.0)],
    )
    assert anchor_overlap_term(state, 0, Weights()) == 0.0


def test_point_anchor_adds_no_overlap_energy() -> None:
    # anchor 1 sits inside label 0's box; as a bare point it costs nothing
    labels = [Label(0, 0, 10, 4), Label(50, 50, 60, 54)]
    point = PlacementState(labels=labels, anchors=[Anchor(50, 50), Anchor(5, 2)])
    assert Anchor(5, 2).radius == 0.0
    assert anchor_overlap_term(point, 0, Weights()) == 0.0
    circle = PlacementState(
        labels=labels,
        anchors=[Anchor(50, 50), Anchor(5, 2, radius=DEFAULT_ANCHOR_RADIUS)],
    )
    # extent (3, 0, 7, 4) inside the box -> 4 x 4
    assert anchor_overlap_term(circle, 0, Weights()) == pytest.approx(16 * 30.0)


def test_obstacle_term_polygon() -> None:
    state = PlacementState(
        labels=[Label(0, 0, 10, 4)],
        anchors=[Anchor(0, 0)],
        obstacles=[box(2, 2, 6, 6)],
    )
    assert obstacle_term(state, 0, Weights()) == pytest.approx(8 * 30.0)


def test_obstacle_term_exact_check_rejects_extent_only_overlap() -> None:
    triangle = Polygon([(9, 7), (15, 7), (15, 1)])
    state = PlacementState(labels=[Label(0, 0, 10, 4)], anchors=[Anchor(0, 0)], obstacles=[triangle])
    assert obstacle_term(state, 0, Weights()) == 0.0


def test_obstacle_term_crossing_line_uses_clipped_length() -> None:
    label = Label(0, 0, 10, 4)
    horizontal = LineString([(-5, 2), (15, 2)])
    state = PlacementState(labels=[label], anchors=[Anchor(0, 0)], obstacles=[horizontal])
    assert obstacle_term(state, 0, Weights()) == pytest.approx(10 * 30.0)
    diagonal = LineString([(0, 0), (10, 4)])
    state = PlacementState(labels=[label], anchors=[Anchor(0, 0)], obstacles=[diagonal])
    assert obstacle_term(state, 0, Weights()) == pytest.approx(math.hypot(10, 4) * 30.0)


def test_obstacle_term_point_costs_one_unit() -> None:
    state = PlacementState(labels=[Label(0, 0, 10, 4)], anchors=[Anchor(0, 0)], obstacles=[Point(5, 2)])
    assert obstacle_term(state, 0, Weights()) == pytest.approx(30.0)
    state.labels[0].set_extent((6, 0, 16, 4))
    assert obstacle_term(state, 0, Weights()) == 0.0


def test_obstacle_term_polygon_uses_exact_area_not_extent() -> None:
    # extent covers the whole label row, the shape only the 1x1 corner
    ell = Polygon([(-20, -20), (20, -20), (20, -19), (1, -19), (1, 1), (-20, 1)])
    state = PlacementState(labels=[Label(0, 0, 10, 4)], anchors=[Anchor(0, 0)], obstacles=[ell])
    assert obstacle_term(state, 0, Weights()) == pytest.approx(1.0 * 30.0)


def test_moving_off_a_line_obstacle_lowers_energy() -> None:
    road = LineString([(-50, 2), (50, 2)])
    state = PlacementState(labels=[Label(0, 0, 10, 4)], anchors=[Anchor(0, 4)], obstacles=[road])
    w = Weights()
    on_road = energy(state, 0, w)
    state.labels[0].set_extent((0, 4, 10, 8))
    assert energy(state, 0, w) < on_road


def test_orientation_term_slot() -> None:
    state = PlacementState(labels=[Label(-5, -5, 5, -1)], anchors=[Anchor(0, 0)])
    w = Weights()
    assert orientation_term(state, 0, w) == 0.0
    assert prefer_above_right(state.labels[0], state.anchors[0]) == 2.0
    assert orientation_term(state, 0, w, prefer_above_right) == pytest.approx(6.0)
    above_right = PlacementState(labels=[Label(1, 1, 5, 3)], anchors=[Anchor(0, 0)])
    assert orientation_term(above_right, 0, w, prefer_above_right) == 0.0


def test_intersection_weight_has_no_effect() -> None:
    state = _two_overlapping()
    a = energy(state, 0, Weights(intersection=0.0))
    b = energy(state, 0, Weights(intersection=1000.0))
    assert a == b


def test_energy_sums_terms() -> None:
    state = PlacementState(
        labels=[Label(0, 0, 10, 4), Label(3, 0, 13, 4)],
        anchors=[Anchor(0, 0, radius=1.0), Anchor(3, 0, radius=1.0)],
        obstacles=[box(8, 3, 12, 8)],
    )
    w = Weights()
    expected = (
        anchor_distance_term(state, 0, w)
        + label_overlap_term(state, 0, w)
        + anchor_overlap_term(state, 0, w)
        + obstacle_term(state, 0, w)
    )
    assert energy(state, 0, w) == pytest.approx(expected)
    assert anchor_distance_term(state, 0, w) == pytest.approx(0.2 * 4.0)
