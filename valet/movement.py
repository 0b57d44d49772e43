#!/usr/bin/env python3
"""
valet/movement.py
=================
Per-tick pedestrian movement: straight-line stepping, wall reflection
and approach-zone dwell tracking.

The pedestrian is immutable; every function returns a new
:class:`~valet.entities.Pedestrian`.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace
from typing import Sequence

from valet.entities import Gate, Pedestrian
from valet.geometry import clamp, normalize_degrees
from valet.policy import ValetPolicy
from valet.scoring import find_approach_zone

log = logging.getLogger("movement")


def step(pedestrian: Pedestrian, gates: Sequence[Gate], policy: ValetPolicy) -> Pedestrian:
    """Advance *pedestrian* by one tick.

    Walls reflect the heading: leaving through a vertical wall mirrors it
    as ``180 − heading``, leaving through a horizontal wall as
    ``−heading``.  Both checks run every tick, so a corner hit flips both.
    """
    heading = pedestrian.heading_deg
    radians = math.radians(heading)
    x = pedestrian.x + math.cos(radians) * pedestrian.speed
    y = pedestrian.y + math.sin(radians) * pedestrian.speed

    if x < policy.min_x or x > policy.max_x:
        x = clamp(x, policy.min_x, policy.max_x)
        heading = 180.0 - heading
        log.debug("bounce x at (%.1f, %.1f) heading → %.1f", x, y, heading)
    if y < policy.min_y or y > policy.max_y:
        y = clamp(y, policy.min_y, policy.max_y)
        heading = -heading
        log.debug("bounce y at (%.1f, %.1f) heading → %.1f", x, y, heading)

    zone = find_approach_zone((x, y), gates, policy.approach_radius)
    if zone is None:
        dwell = 0.0
    elif zone == pedestrian.approach_zone:
        dwell = pedestrian.dwell_s + policy.tick_s
    else:
        dwell = policy.tick_s
        log.debug("entered approach zone %s", zone)

    return replace(
        pedestrian,
        x=x,
        y=y,
        heading_deg=normalize_degrees(heading),
        approach_zone=zone,
        dwell_s=dwell,
    )


def perturb_heading(pedestrian: Pedestrian, offset_deg: float) -> Pedestrian:
    """Turn the pedestrian by *offset_deg* (positive = clockwise on screen)."""
    return replace(
        pedestrian, heading_deg=normalize_degrees(pedestrian.heading_deg + offset_deg)
    )


def random_heading_offset(rng: random.Random, spread_deg: float) -> float:
    """Uniform offset in ``[−spread/2, spread/2)``."""
    return (rng.random() - 0.5) * spread_deg
