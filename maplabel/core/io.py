# maplabel/core/io.py
"""
Load a placement problem from JSON: labels (boxes or text to measure), optional
anchors, bounds, obstacles (WKT) and weights.
Labels without anchors get default anchors before the annealer sees them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from shapely import wkt
from shapely.errors import ShapelyError
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

from maplabel.core import error_codes
from maplabel.core.anchors import default_anchors
from maplabel.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PT
from maplabel.core.text_metrics import label_for_text
from maplabel.core.types import Anchor, Extent, Label, Weights
from maplabel.core.validate import LabelerConfigError

logger = logging.getLogger(__name__)


@dataclass
class Problem:
    """Everything needed to build a Labeler."""
    labels: list[Label]
    anchors: list[Anchor]
    bounds: Extent | None = None
    obstacles: list[BaseGeometry] = field(default_factory=list)
    weights: Weights = field(default_factory=Weights)


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _invalid(detail: str) -> LabelerConfigError:
    return LabelerConfigError(error_codes.INVALID_PROBLEM, detail)


def _number(obj: dict, key: str, where: str) -> float:
    if key not in obj:
        raise _invalid(f"{where}: missing {key!r}")
    try:
        return float(obj[key])
    except (TypeError, ValueError) as e:
        raise _invalid(f"{where}: {key}={obj[key]!r}") from e


def parse_label(obj: Any, i: int) -> Label:
    """Box label ({xmin, ymin, xmax, ymax}) or text label ({text, x, y[, font_size_pt]})."""
    where = f"labels[{i}]"
    if not isinstance(obj, dict):
        raise _invalid(f"{where}: expected an object")
    text = str(obj.get("text", ""))
    if "xmin" in obj:
        return Label(
            xmin=_number(obj, "xmin", where),
            ymin=_number(obj, "ymin", where),
            xmax=_number(obj, "xmax", where),
            ymax=_number(obj, "ymax", where),
            text=text,
        )
    if not text:
        raise _invalid(f"{where}: needs a box or a text")
    return label_for_text(
        text,
        _number(obj, "x", where),
        _number(obj, "y", where),
        font_family=str(obj.get("font_family", DEFAULT_FONT_FAMILY)),
        font_size_pt=float(obj.get("font_size_pt", DEFAULT_FONT_SIZE_PT)),
    )


def parse_anchor(obj: Any, i: int) -> Anchor:
    where = f"anchors[{i}]"
    if isinstance(obj, (list, tuple)) and len(obj) in (2, 3):
        obj = dict(zip(("x", "y", "radius"), obj))
    if not isinstance(obj, dict):
        raise _invalid(f"{where}: expected an object or [x, y, radius]")
    radius = _number(obj, "radius", where) if "radius" in obj else 0.0
    return Anchor(x=_number(obj, "x", where), y=_number(obj, "y", where), radius=radius)


def parse_bounds(obj: Any) -> Extent | None:
    if obj is None:
        return None
    if isinstance(obj, dict):
        obj = [obj.get(k) for k in ("xmin", "ymin", "xmax", "ymax")]
    try:
        vals = tuple(float(v) for v in obj)
    except (TypeError, ValueError) as e:
        raise _invalid(f"bounds: {obj!r}") from e
    if len(vals) != 4:
        raise _invalid(f"bounds: expected 4 values, got {len(vals)}")
    return vals  # type: ignore[return-value]


def parse_obstacle(wkt_string: str, i: int) -> BaseGeometry:
    """Parse one WKT obstacle; invalid polygons are fixed with buffer(0)."""
    try:
        geom = wkt.loads(wkt_string)
    except (ShapelyError, TypeError, AttributeError) as e:
        raise _invalid(f"obstacles[{i}]: {e}") from e
    if geom.is_empty:
        raise _invalid(f"obstacles[{i}]: empty geometry")
    if isinstance(geom, (Polygon, MultiPolygon)) and not geom.is_valid:
        logger.warning("obstacles[%d] is invalid; fixing with buffer(0)", i)
        geom = geom.buffer(0)
    return geom


def parse_weights(obj: Any) -> Weights:
    if obj is None:
        return Weights()
    if not isinstance(obj, dict):
        raise _invalid("weights: expected an object")
    known = set(Weights().as_dict())
    unknown = set(obj) - known
    if unknown:
        raise _invalid(f"weights: unknown keys {sorted(unknown)}")
    try:
        return Weights(**{k: float(v) for k, v in obj.items()})
    except (TypeError, ValueError) as e:
        raise _invalid(f"weights: {e}") from e


def problem_from_dict(data: dict) -> Problem:
    """
    Build a Problem from a decoded JSON document.
    Missing anchors are derived from label corners (see anchors.default_anchors).
    """
    if not isinstance(data, dict):
        raise _invalid("top level must be an object")
    raw_labels = data.get("labels")
    if not isinstance(raw_labels, list):
        raise _invalid("labels: expected a list")
    labels = [parse_label(obj, i) for i, obj in enumerate(raw_labels)]
    raw_anchors = data.get("anchors")
    if raw_anchors:
        anchors = [parse_anchor(obj, i) for i, obj in enumerate(raw_anchors)]
    else:
        anchors = default_anchors(labels)
    obstacles = [parse_obstacle(s, i) for i, s in enumerate(data.get("obstacles") or [])]
    return Problem(
        labels=labels,
        anchors=anchors,
        bounds=parse_bounds(data.get("bounds")),
        obstacles=obstacles,
        weights=parse_weights(data.get("weights")),
    )


def load_problem(path: str | Path, repo_root: Path | None = None) -> Problem:
    """
    Load a problem JSON file.
    Raises FileNotFoundError if path is missing, LabelerConfigError (a ValueError)
    if the document is malformed.
    """
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Problem file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise _invalid(f"{resolved.name}: {e}") from e
    return problem_from_dict(data)
