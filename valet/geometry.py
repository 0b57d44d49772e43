#!/usr/bin/env python3
"""
valet/geometry.py
=================
Low-level 2D helpers used by :mod:`valet.beacons`, :mod:`valet.scoring`
and :mod:`valet.movement`.

Keeping these in a separate module avoids circular imports and makes unit
testing straightforward.
"""

from __future__ import annotations

import math
from typing import Tuple

Point = Tuple[float, float]

_TWO_PI = 2.0 * math.pi


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points (never negative)."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def angle_to(src: Point, dst: Point) -> float:
    """Angle in radians of the vector *src* → *dst*, in (−π, π]."""
    return math.atan2(dst[1] - src[1], dst[0] - src[0])


def angle_difference(a: float, b: float) -> float:
    """Smallest unsigned difference between two angles (radians).

    Works for any input range, so ``angle_difference(-3.1, 3.1)`` is
    small, not close to 2π.

    Returns
    -------
    float
        A value in ``[0, π]``.
    """
    diff = abs(a - b) % _TWO_PI
    if diff > math.pi:
        diff = _TWO_PI - diff
    return diff


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def normalize_degrees(deg: float) -> float:
    """Wrap a heading into ``[0, 360)``."""
    wrapped = deg % 360.0
    # -1e-17 % 360 == 360.0 in floating point
    return 0.0 if wrapped >= 360.0 else wrapped


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties towards +∞.

    Python's :func:`round` uses banker's rounding (``round(92.5) == 92``);
    confidences and ETAs use the ``.5 → up`` convention.
    """
    return int(math.floor(value + 0.5))
