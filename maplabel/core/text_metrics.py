# maplabel/core/text_metrics.py
"""
Size label boxes from their text with Pillow. 1 pt = 1 plane unit, so a
label's width and height are the rendered text's bbox in points.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from PIL import ImageFont

from maplabel.core.config import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE_PT
from maplabel.core.types import Label

logger = logging.getLogger(__name__)


def _font_files(font_family: str) -> list[str]:
    """TrueType names tried for a family, then for the configured default family."""
    names: list[str] = []
    for family in (font_family, DEFAULT_FONT_FAMILY):
        for name in (family, family + ".ttf", family.replace(" ", "") + ".ttf"):
            if name not in names:
                names.append(name)
    return names


@lru_cache(maxsize=None)
def label_font(font_family: str = DEFAULT_FONT_FAMILY, font_size_pt: float = DEFAULT_FONT_SIZE_PT):
    """
    Font used to size labels. Cached per (family, size), so a missing family
    is logged once. Falls back to Pillow's built-in font at the requested size.
    """
    size = max(1, int(round(font_size_pt)))
    for name in _font_files(font_family):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    logger.warning("Font %r not found; sizing labels with Pillow's default font", font_family)
    return ImageFont.load_default(size=size)


def measure_text_pt(
    text: str,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_pt: float = DEFAULT_FONT_SIZE_PT,
) -> tuple[float, float]:
    """Return (width_pt, height_pt) of the rendered text."""
    font = label_font(font_family, font_size_pt)
    left, top, right, bottom = font.getbbox(text)
    # the bitmap fallback has no size and renders at its own fixed size
    scale = font_size_pt / max(1.0, float(getattr(font, "size", font_size_pt)))
    return (float(right - left) * scale, float(bottom - top) * scale)


def label_for_text(
    text: str,
    x: float,
    y: float,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_pt: float = DEFAULT_FONT_SIZE_PT,
) -> Label:
    """Label box with its (xmin, ymin) corner at (x, y), sized to the text."""
    w, h = measure_text_pt(text, font_family, font_size_pt)
    return Label(xmin=x, ymin=y, xmax=x + w, ymax=y + h, text=text)
