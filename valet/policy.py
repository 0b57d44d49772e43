#!/usr/bin/env python3
"""
valet/policy.py
===============
Tunable scoring, movement and dispatch parameters for the valet
simulation.  Every constant lives in the frozen :class:`ValetPolicy`
dataclass so that experiments can swap policies without touching code.

Invalid values are rejected at construction time with
:class:`PolicyError`; a policy that exists is always safe to divide by.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


class PolicyError(ValueError):
    """Raised when a :class:`ValetPolicy` field holds an unusable value."""


@dataclass(frozen=True)
class ValetPolicy:
    """Immutable bag of every tunable simulation parameter.

    Groups: dispatch trigger, scoring, beacons, timing, venue bounds,
    initial pedestrian, operator controls.
    """

    # ── Dispatch trigger ──────────────────────────────────────────────────
    trigger_threshold: float = 90.0
    """Confidence that must be *exceeded* (strictly) to dispatch."""

    sustain_ticks: int = 1
    """Consecutive ticks the same gate must lead above the threshold."""

    eta_divisor: float = 10.0
    """``distance / speed / eta_divisor`` gives the ETA in seconds."""

    redirect_enabled: bool = False
    """Allow an active dispatch to follow a new leading gate."""

    # ── Scoring ───────────────────────────────────────────────────────────
    approach_radius: float = 80.0
    """Distance below which the pedestrian is inside a gate's approach zone."""

    gate_max_distance: float = 300.0
    """Distance at which the proximity score reaches zero."""

    proximity_weight: float = 0.4
    vector_weight: float = 0.4
    dwell_weight: float = 0.2

    dwell_score_per_s: float = 2.0
    """Dwell score gained per second in the zone (capped at 100)."""

    # ── Beacons ───────────────────────────────────────────────────────────
    beacon_max_range: float = 80.0
    """Distance at which a beacon's signal strength reaches zero."""

    # ── Timing ────────────────────────────────────────────────────────────
    tick_interval_ms: int = 200
    """Period of one simulation tick (5 Hz)."""

    # ── Venue bounds (walls) ──────────────────────────────────────────────
    venue_width: float = 800.0
    venue_height: float = 600.0
    wall_margin: float = 30.0
    """Walkable area is the venue rectangle shrunk by this margin."""

    # ── Initial pedestrian ────────────────────────────────────────────────
    start_x: float = 400.0
    start_y: float = 300.0
    start_heading_deg: float = 0.0
    walking_speed: float = 1.2
    """Venue units advanced per tick."""

    # ── Operator controls ─────────────────────────────────────────────────
    perturb_spread_deg: float = 60.0
    """Width of the random heading change (±half of this)."""

    log_capacity: int = 10
    """Entries retained in the activity log."""

    def __post_init__(self) -> None:
        positive = (
            "sustain_ticks",
            "eta_divisor",
            "approach_radius",
            "gate_max_distance",
            "beacon_max_range",
            "tick_interval_ms",
            "venue_width",
            "venue_height",
            "walking_speed",
            "log_capacity",
        )
        for name in positive:
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise PolicyError(f"{name} must be positive, got {value!r}")

        for name in ("proximity_weight", "vector_weight", "dwell_weight",
                     "dwell_score_per_s", "perturb_spread_deg", "wall_margin"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise PolicyError(f"{name} must be non-negative, got {value!r}")

        total = self.proximity_weight + self.vector_weight + self.dwell_weight
        if abs(total - 1.0) > 1e-9:
            raise PolicyError(f"score weights must sum to 1, got {total!r}")

        if not 0.0 <= self.trigger_threshold <= 100.0:
            raise PolicyError(
                f"trigger_threshold must be within [0, 100], got {self.trigger_threshold!r}"
            )

        if self.min_x >= self.max_x or self.min_y >= self.max_y:
            raise PolicyError("wall_margin leaves no walkable area")

        if not (self.min_x <= self.start_x <= self.max_x
                and self.min_y <= self.start_y <= self.max_y):
            raise PolicyError(
                f"start position ({self.start_x}, {self.start_y}) is outside the walls"
            )

    # ── Derived values ────────────────────────────────────────────────────

    @property
    def tick_s(self) -> float:
        """Tick period in seconds; also the dwell increment per tick."""
        return self.tick_interval_ms / 1000.0

    @property
    def min_x(self) -> float:
        return self.wall_margin

    @property
    def max_x(self) -> float:
        return self.venue_width - self.wall_margin

    @property
    def min_y(self) -> float:
        return self.wall_margin

    @property
    def max_y(self) -> float:
        return self.venue_height - self.wall_margin
