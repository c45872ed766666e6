# maplabel/core/types.py
"""
Dataclasses for labels, anchors, weights, placement state and run bookkeeping.
Extents are (xmin, ymin, xmax, ymax) tuples throughout.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Protocol

from maplabel.core.config import (
    W_INTERSECTION,
    W_LABEL_ANCHOR,
    W_LABEL_OVERLAP,
    W_LENGTH,
    W_ORIENTATION,
)


Extent = tuple[float, float, float, float]
MoveKind = Literal["translate", "rotate"]


@dataclass
class Label:
    """Mutable axis-aligned label box. The annealer repositions it in place."""
    xmin: float
    ymin: float
    xmax: float
    ymax: float
    text: str = ""

    @property
    def extent(self) -> Extent:
        return (self.xmin, self.ymin, self.xmax, self.ymax)

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    def set_extent(self, extent: Extent) -> None:
        self.xmin, self.ymin, self.xmax, self.ymax = extent


@dataclass(frozen=True)
class Anchor:
    """
    Fixed circular region a label is attached to.
    radius defaults to 0: a bare point, which still pulls its own label through
    the distance term but never adds label-anchor overlap energy to other labels.
    Give a radius (anchors.default_anchors uses DEFAULT_ANCHOR_RADIUS) to keep
    other labels off the anchor.
    """
    x: float
    y: float
    radius: float = 0.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def extent(self) -> Extent:
        r = self.radius
        return (self.x - r, self.y - r, self.x + r, self.y + r)

    def intersects_extent(self, extent: Extent) -> bool:
        """True if the circle touches the box (closest box point within radius)."""
        xmin, ymin, xmax, ymax = extent
        nx = min(max(self.x, xmin), xmax)
        ny = min(max(self.y, ymin), ymax)
        return math.hypot(self.x - nx, self.y - ny) <= self.radius


class Obstacle(Protocol):
    """Anything with an extent and exact intersection ops; shapely geometries qualify."""

    @property
    def bounds(self) -> tuple[float, ...]: ...

    def intersects(self, other: Any) -> bool: ...

    def intersection(self, other: Any) -> Any: ...


@dataclass(frozen=True)
class Weights:
    """Energy weights, fixed for the duration of a run."""
    length: float = W_LENGTH
    intersection: float = W_INTERSECTION
    label_overlap: float = W_LABEL_OVERLAP
    label_anchor: float = W_LABEL_ANCHOR
    orientation: float = W_ORIENTATION

    def as_dict(self) -> dict[str, float]:
        return {
            "length": self.length,
            "intersection": self.intersection,
            "label_overlap": self.label_overlap,
            "label_anchor": self.label_anchor,
            "orientation": self.orientation,
        }


@dataclass
class PlacementState:
    """
    Everything one annealing run owns: labels (mutated), anchors, optional bounds
    and obstacles. anchors[i] pairs with labels[i].
    """
    labels: list[Label]
    anchors: list[Anchor]
    bounds: Extent | None = None
    obstacles: list[Obstacle] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class MoveRecord:
    """Label index, move kind and the exact pre-move corners, for reverting."""
    index: int
    kind: MoveKind
    old_extent: Extent


class RunState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"


@dataclass
class RunStats:
    """Bookkeeping for one run. Placement itself lives in the mutated labels."""
    nsweeps: int
    sweeps_completed: int = 0
    accepted: int = 0
    rejected: int = 0
    rejected_out_of_bounds: int = 0
    final_temperature: float = 0.0
    cancelled: bool = False

    @property
    def attempted(self) -> int:
        return self.accepted + self.rejected

    @property
    def acceptance_rate(self) -> float:
        return self.accepted / self.attempted if self.attempted else 0.0
