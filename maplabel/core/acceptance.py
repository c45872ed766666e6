# maplabel/core/acceptance.py
"""
Metropolis acceptance with a hard boundary wall.
"""

from __future__ import annotations

import math

from maplabel.core.geometry import contains_extent
from maplabel.core.types import Extent


def metropolis_probability(delta_energy: float, temperature: float) -> float:
    """
    exp(-dE / T) clipped to [0, 1]. Non-positive T is the T -> 0+ limit:
    1 for dE <= 0, else 0.
    """
    if delta_energy <= 0:
        return 1.0
    if temperature <= 0:
        return 0.0
    return math.exp(-delta_energy / temperature)


def within_bounds(extent: Extent, bounds: Extent | None) -> bool:
    return bounds is None or contains_extent(bounds, extent)


def accept_move(
    delta_energy: float,
    temperature: float,
    draw: float,
    new_extent: Extent,
    bounds: Extent | None = None,
) -> bool:
    """
    Keep a proposed move? Out-of-bounds placements are always rejected.
    Otherwise accept if dE <= 0 or draw <= exp(-dE / T).
    """
    if not within_bounds(new_extent, bounds):
        return False
    if delta_energy <= 0:
        return True
    if temperature <= 0:
        return False
    return draw <= metropolis_probability(delta_energy, temperature)
