"""Tolerant slicing and number conversion for fixed-width catalogue text."""

from __future__ import annotations

import math
import re
from typing import Optional

from astropy.coordinates import Angle
import astropy.units as u

from .layouts import FieldDef

_FLOAT_PREFIX_RE = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_INT_PREFIX_RE = re.compile(r"^\s*[-+]?\d+")

TWO_PI = 2.0 * math.pi


def field(line: str, start: int, width: Optional[int] = None, requires: Optional[int] = None) -> str:
    """Return the whitespace-trimmed column ``line[start:start + width]``.

    An empty string comes back when the line is shorter than ``requires``
    (or than the end of the column when ``requires`` is not given); a
    ``width`` of None reads to the end of the line.
    """
    stop = None if width is None else start + width
    needed = requires if requires is not None else (stop if stop is not None else start)
    if len(line) < needed:
        return ""
    return line[start:stop].strip()


def layout_field(line: str, column: FieldDef) -> str:
    return field(line, column.start, column.width, column.requires)


def str_to_float(text: str) -> float:
    """Convert the leading numeric part of *text*; 0.0 when there is none."""
    match = _FLOAT_PREFIX_RE.match(text or "")
    if match is None:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def str_to_int(text: str) -> int:
    match = _INT_PREFIX_RE.match(text or "")
    if match is None:
        return 0
    return int(match.group(0))


def parse_angle(text: str, *, is_ra: bool) -> float:
    """Convert "DD MM SS.S", "DD MM.M" or "DD.D" text to decimal degrees.

    Right ascension is read in hours. Missing minute/second groups count as
    zero and a leading '-' applies to the whole value ("-00 30" is -0.5).
    Unparsable text gives 0.0.
    """
    text = (text or "").strip()
    if not text:
        return 0.0
    try:
        angle = Angle(text, unit=u.hourangle if is_ra else u.deg)
        return float(angle.degree)
    except (ValueError, u.UnitsError):
        return 0.0


def atan2pi(y: float, x: float) -> float:
    """Arctangent of y/x in [0, 2π)."""
    angle = math.atan2(y, x)
    return angle + TWO_PI if angle < 0.0 else angle
