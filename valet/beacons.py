#!/usr/bin/env python3
"""
valet/beacons.py
================
Beacon proximity model: turns the pedestrian position into a simulated
signal strength per beacon.

Strength falls linearly from 100 at the beacon to 0 at ``max_range``.
The values are display only; gate scoring does not consult them.
"""

from __future__ import annotations

from typing import Dict, Mapping, Sequence, Tuple

import numpy as np

from valet.entities import Beacon


def beacon_strengths(
    position: Tuple[float, float],
    beacons: Sequence[Beacon],
    max_range: float,
) -> Dict[str, float]:
    """Signal strength (0–100) of every beacon, keyed by beacon id.

    Parameters
    ----------
    position : (float, float)
        Pedestrian position in venue coordinates.
    beacons : sequence of Beacon
        Order is preserved in the returned dict.
    max_range : float
        Distance at which the signal vanishes. Must be positive
        (enforced by :class:`~valet.policy.ValetPolicy`).
    """
    if not beacons:
        return {}
    coords = np.array([(b.x, b.y) for b in beacons], dtype=float)
    dist = np.hypot(coords[:, 0] - position[0], coords[:, 1] - position[1])
    strength = np.clip((max_range - dist) / max_range, 0.0, 1.0) * 100.0
    return {b.id: float(s) for b, s in zip(beacons, strength)}


def active_beacon_count(strengths: Mapping[str, float]) -> int:
    """Number of beacons currently hearing the pedestrian."""
    return sum(1 for s in strengths.values() if s > 0.0)
