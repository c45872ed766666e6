# maplabel/core/anchors.py
"""
Pre-processing: derive anchors for callers that supply none.
Runs before a Labeler is built; the annealer itself always receives explicit anchors.
"""

from __future__ import annotations

from typing import Sequence

from maplabel.core.config import DEFAULT_ANCHOR_RADIUS
from maplabel.core.types import Anchor, Label


def default_anchors(labels: Sequence[Label], radius: float = DEFAULT_ANCHOR_RADIUS) -> list[Anchor]:
    """One anchor per label: a circle of the given radius at the label's (xmin, ymin) corner."""
    return [Anchor(x=lab.xmin, y=lab.ymin, radius=radius) for lab in labels]
