# maplabel/core/config.py
"""
Central configuration for simulated-annealing label placement.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Energy weights -----
W_LENGTH: float = 0.2
"""Penalty per unit distance between label reference corner and anchor center."""

W_INTERSECTION: float = 1.0
"""Reserved leader-line intersection weight. Kept for compatibility; no term reads it."""

W_LABEL_OVERLAP: float = 30.0
"""Penalty per unit area of label-label overlap."""

W_LABEL_ANCHOR: float = 30.0
"""Penalty per unit area of label-anchor overlap and per unit of obstacle overlap size."""

OBSTACLE_CONTACT_UNIT: float = 1.0
"""Overlap size charged for an obstacle touching a label at a point only."""

W_ORIENTATION: float = 3.0
"""Scale for the orientation rule. The default rule returns 0."""

# ----- Moves -----
MAX_MOVE: float = 5.0
"""Max translation per move; dx, dy drawn from [-MAX_MOVE/2, MAX_MOVE/2]."""

MAX_ANGLE: float = 0.5
"""Max rotation (radians) per move; angle drawn from [-MAX_ANGLE/2, MAX_ANGLE/2]."""

ROTATE_PROBABILITY: float = 0.5
"""Chance of a rotate move (vs translate) per iteration."""

# ----- Annealing -----
INITIAL_TEMPERATURE: float = 1.0
N_SWEEPS: int = 200

# ----- Anchors -----
DEFAULT_ANCHOR_RADIUS: float = 2.0
"""Radius of anchors derived from label corners when the caller supplies none."""

REFERENCE_CORNER: str = "xmin_ymax"
"""Label corner measured against its anchor: 'xmin_ymax' or 'xmin_ymin'."""

# ----- Determinism -----
SEED: int | None = 42
"""Random seed for the annealer; None for non-deterministic."""

# ----- Text-measured labels -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
DEFAULT_FONT_SIZE_PT: float = 12.0

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Root log level for CLI entrypoints. Set env LOG_LEVEL=DEBUG for per-sweep output."""
