#!/usr/bin/env python3
"""
valet/entities.py
=================
Plain data containers for the venue and the tracked pedestrian.

Gates and beacons are fixed venue furniture; their per-tick values
(confidence, signal strength) are computed by :mod:`valet.scoring` and
:mod:`valet.beacons` and live in the session's readings, not here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

ColorRGB = Tuple[int, int, int]


@dataclass(frozen=True)
class Gate:
    """An exit gate where a car can be sent.

    Attributes
    ----------
    id : str
        Short identifier (``"A"``).
    name : str
        Display name (``"North Gate"``).
    x, y : float
        Venue coordinates.
    color : ColorRGB
        Display colour used by the map and the confidence bars.
    """

    id: str
    name: str
    x: float
    y: float
    color: ColorRGB

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Beacon:
    """A simulated BLE beacon at a fixed venue position."""

    id: str
    x: float
    y: float


@dataclass(frozen=True)
class Pedestrian:
    """Kinematic state of the person walking to an exit.

    Attributes
    ----------
    x, y : float
        Venue coordinates (y grows downward, like the map).
    heading_deg : float
        Walking direction in degrees, 0 = +x, kept in ``[0, 360)``.
    speed : float
        Venue units per tick.
    approach_zone : str or None
        Id of the gate whose approach zone currently contains the pedestrian.
    dwell_s : float
        Seconds spent continuously inside ``approach_zone``.
    """

    x: float
    y: float
    heading_deg: float
    speed: float
    approach_zone: Optional[str] = None
    dwell_s: float = 0.0

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "heading_deg": self.heading_deg,
            "speed": self.speed,
            "approach_zone": self.approach_zone,
            "dwell_s": self.dwell_s,
        }


class CarStatus(str, Enum):
    DISPATCHED = "dispatched"
    EN_ROUTE = "en-route"
    ARRIVED = "arrived"


@dataclass(frozen=True)
class DispatchState:
    """What the valet service has been told to do.

    ``car_status`` starts at ``dispatched``; moving it on to ``en-route``
    and ``arrived`` is the job of whoever executes the dispatch.
    """

    active: bool = False
    gate_id: str = ""
    eta_s: int = 0
    car_status: CarStatus = CarStatus.DISPATCHED

    def as_dict(self) -> Dict[str, Any]:
        return {
            "active": self.active,
            "gate_id": self.gate_id,
            "eta_s": self.eta_s,
            "car_status": self.car_status.value,
        }


EMPTY_DISPATCH = DispatchState()


# ── Default venue ────────────────────────────────────────────────────────────
# 800 × 600 mall floor, one gate per side.

DEFAULT_GATES: Tuple[Gate, ...] = (
    Gate("A", "North Gate", 400.0, 50.0, (59, 130, 246)),
    Gate("B", "East Gate", 750.0, 300.0, (16, 185, 129)),
    Gate("C", "South Gate", 400.0, 550.0, (245, 158, 11)),
    Gate("D", "West Gate", 50.0, 300.0, (239, 68, 68)),
)

DEFAULT_BEACONS: Tuple[Beacon, ...] = (
    Beacon("B1", 200.0, 150.0),
    Beacon("B2", 400.0, 100.0),
    Beacon("B3", 600.0, 150.0),
    Beacon("B4", 650.0, 300.0),
    Beacon("B5", 600.0, 450.0),
    Beacon("B6", 400.0, 500.0),
    Beacon("B7", 200.0, 450.0),
    Beacon("B8", 150.0, 300.0),
    Beacon("B9", 300.0, 250.0),
    Beacon("B10", 500.0, 250.0),
    Beacon("B11", 400.0, 200.0),
    Beacon("B12", 400.0, 350.0),
)
