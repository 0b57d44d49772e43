#!/usr/bin/env python3

from .types import ColorRGB, ColorRGBA, VenueTransform, heading_tip
from .constants import ViewConstants
from .helpers import ViewHelpers
from .draw_map import MapRenderer
from .hud import HudRenderer
from .pygame_view import ValetView, run_pygame_view

__all__ = [
    "ColorRGB",
    "ColorRGBA",
    "VenueTransform",
    "heading_tip",
    "ViewConstants",
    "ViewHelpers",
    "MapRenderer",
    "HudRenderer",
    "ValetView",
    "run_pygame_view",
]
