# maplabel/core/geometry.py
"""
Extent helpers: intersection test and area, containment, corner distance,
rotation of a point about a pivot, and conversion to shapely boxes.
"""

from __future__ import annotations

import math
from typing import Any

from shapely.geometry import Polygon, box

from maplabel.core.types import Extent


def extent_bounds(geom: Any) -> Extent:
    """Return (minx, miny, maxx, maxy) of anything exposing .bounds; empty -> zeros."""
    if geom is None or getattr(geom, "is_empty", False):
        return (0.0, 0.0, 0.0, 0.0)
    b = geom.bounds
    return (float(b[0]), float(b[1]), float(b[2]), float(b[3]))


def extents_intersect(a: Extent, b: Extent) -> bool:
    """Closed-interval overlap test; touching edges count as intersecting."""
    return a[0] <= b[2] and a[2] >= b[0] and a[1] <= b[3] and a[3] >= b[1]


def intersection_area(a: Extent, b: Extent) -> float:
    """Area of the overlap of two extents; 0 when they do not overlap. Symmetric."""
    w = min(a[2], b[2]) - max(a[0], b[0])
    h = min(a[3], b[3]) - max(a[1], b[1])
    if w <= 0 or h <= 0:
        return 0.0
    return w * h


def contains_extent(outer: Extent, inner: Extent) -> bool:
    """True if inner lies fully inside outer (boundary included)."""
    return (
        outer[0] <= inner[0]
        and outer[1] <= inner[1]
        and inner[2] <= outer[2]
        and inner[3] <= outer[3]
    )


def extent_is_finite(extent: Extent) -> bool:
    return all(math.isfinite(v) for v in extent)


def extent_is_ordered(extent: Extent) -> bool:
    return extent[0] <= extent[2] and extent[1] <= extent[3]


def point_distance(p: tuple[float, float], q: tuple[float, float]) -> float:
    return math.hypot(p[0] - q[0], p[1] - q[1])


def rotate_about(
    x: float, y: float, pivot: tuple[float, float], angle_rad: float
) -> tuple[float, float]:
    """Rotate (x, y) by angle_rad counter-clockwise about pivot."""
    s = math.sin(angle_rad)
    c = math.cos(angle_rad)
    dx = x - pivot[0]
    dy = y - pivot[1]
    return (dx * c - dy * s + pivot[0], dx * s + dy * c + pivot[1])


def extent_to_polygon(extent: Extent) -> Polygon:
    """Shapely box for an extent, for exact tests against obstacle geometries."""
    return box(extent[0], extent[1], extent[2], extent[3])
