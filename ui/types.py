"""
ui/types.py
===========
Lightweight data containers used across every UI module.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

ColorRGB = Tuple[int, int, int]
ColorRGBA = Tuple[int, int, int, int]


@dataclass
class VenueTransform:
    """Maps venue coordinates into the on-screen map rectangle.

    The venue keeps its aspect ratio and is centred inside the rectangle.
    Venue y already grows downward, like screen y, so no flip is needed.
    """
    left: int
    top: int
    width: int
    height: int
    venue_w: float
    venue_h: float

    @property
    def scale(self) -> float:
        return min(self.width / self.venue_w, self.height / self.venue_h)

    @property
    def origin(self) -> Tuple[float, float]:
        s = self.scale
        ox = self.left + (self.width - self.venue_w * s) / 2
        oy = self.top + (self.height - self.venue_h * s) / 2
        return ox, oy

    def to_screen(self, vx: float, vy: float) -> Tuple[float, float]:
        ox, oy = self.origin
        s = self.scale
        return ox + vx * s, oy + vy * s

    def to_venue(self, sx: float, sy: float) -> Tuple[float, float]:
        ox, oy = self.origin
        s = self.scale
        return (sx - ox) / s, (sy - oy) / s

    def length(self, venue_units: float) -> float:
        return venue_units * self.scale

    def contains(self, sx: float, sy: float) -> bool:
        vx, vy = self.to_venue(sx, sy)
        return 0.0 <= vx <= self.venue_w and 0.0 <= vy <= self.venue_h


def heading_tip(x: float, y: float, heading_deg: float, length: float) -> Tuple[float, float]:
    """End point of a heading arrow of *length* starting at *(x, y)*."""
    r = math.radians(heading_deg)
    return x + math.cos(r) * length, y + math.sin(r) * length

