#!/usr/bin/env python3
"""Visual constants shared across all renderers."""

from __future__ import annotations

from typing import Sequence, Tuple

from .types import ColorRGB


class ViewConstants:
    """Mixin providing every visual / layout constant."""

    BG_COLOR: ColorRGB = (17, 24, 39)
    PANEL_COLOR: ColorRGB = (31, 41, 55)
    CARD_COLOR: ColorRGB = (55, 65, 81)
    BORDER_COLOR: ColorRGB = (75, 85, 99)
    MAP_COLOR: ColorRGB = (55, 65, 81)
    WALL_COLOR: ColorRGB = (107, 114, 128)
    TEXT_COLOR: ColorRGB = (243, 244, 246)
    MUTED_TEXT_COLOR: ColorRGB = (156, 163, 175)
    GOOD_COLOR: ColorRGB = (74, 222, 128)
    WARN_COLOR: ColorRGB = (250, 204, 21)
    BEACON_COLOR: ColorRGB = (99, 102, 241)
    PEDESTRIAN_COLOR: ColorRGB = (245, 158, 11)
    PEDESTRIAN_RING_COLOR: ColorRGB = (252, 211, 77)
    DISPATCH_BG_COLOR: ColorRGB = (20, 83, 45)
    DISPATCH_BORDER_COLOR: ColorRGB = (21, 128, 61)

    ZONE_FILL_ALPHA = 26
    BEACON_RING_ALPHA_MAX = 110

    LEFT_PANEL_W = 300
    RIGHT_PANEL_W = 280
    LOG_PANEL_H = 150
    PANEL_PAD = 16

    PEDESTRIAN_RADIUS_PX = 8
    HEADING_ARROW_UNITS = 20.0
    BEACON_RADIUS_PX = 4
    BEACON_RING_SCALE = 0.3
    """Strength → ring radius, in venue units."""

    MID_CONFIDENCE = 50

    SENSORS: Sequence[Tuple[str, str]] = (
        ("BLE Beacons", "Active"),
        ("Wi-Fi", "Active"),
        ("IMU", "Active"),
        ("GPS", "Limited"),
    )

    HELP_LINES: Sequence[str] = (
        "SPACE  Request car / Stop",
        "R      Reset",
        "D      Change direction",
        "CLICK  Place pedestrian",
        "F3     Score breakdown",
        "L      Toggle side panels",
        "F12    Screenshot",
    )

    SCREENSHOT_DIR = "screenshots"
