#!/usr/bin/env python3
"""
valet/scoring.py
================
Gate confidence scorer.

Each gate gets three sub-scores on a 0–100 scale, combined with the
policy weights into a single integer confidence:

* **proximity** — how close the pedestrian is to the gate;
* **vector** — how well the walking direction points at the gate;
* **dwell** — how long the pedestrian has lingered in the gate's
  approach zone.

All helpers are stateless so they can be exercised without a session.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from valet.entities import Gate, Pedestrian
from valet.geometry import (
    angle_difference,
    angle_to,
    clamp,
    distance,
    round_half_up,
)
from valet.policy import ValetPolicy


@dataclass(frozen=True)
class GateScore:
    """Sub-scores behind one gate's confidence (for the debug overlay)."""

    gate_id: str
    proximity: float
    vector: float
    dwell: float
    confidence: int


def proximity_score(dist: float, max_distance: float) -> float:
    """100 at the gate, 0 at or beyond *max_distance*."""
    return max(0.0, max_distance - dist) / max_distance * 100.0


def vector_score(pedestrian: Pedestrian, gate: Gate) -> float:
    """100 when walking straight at the gate, 0 when walking straight away."""
    bearing = angle_to(pedestrian.position, gate.position)
    diff = angle_difference(bearing, math.radians(pedestrian.heading_deg))
    return max(0.0, (math.pi - diff) / math.pi * 100.0)


def dwell_score(pedestrian: Pedestrian, gate: Gate, per_second: float) -> float:
    if pedestrian.approach_zone != gate.id:
        return 0.0
    return min(100.0, pedestrian.dwell_s * per_second)


def score_gate_breakdown(
    pedestrian: Pedestrian,
    gate: Gate,
    policy: ValetPolicy,
) -> GateScore:
    prox = proximity_score(
        distance(pedestrian.position, gate.position), policy.gate_max_distance
    )
    vec = vector_score(pedestrian, gate)
    dwell = dwell_score(pedestrian, gate, policy.dwell_score_per_s)
    combined = (
        policy.proximity_weight * prox
        + policy.vector_weight * vec
        + policy.dwell_weight * dwell
    )
    confidence = int(clamp(round_half_up(combined), 0, 100))
    return GateScore(gate.id, prox, vec, dwell, confidence)


def score_gate(pedestrian: Pedestrian, gate: Gate, policy: ValetPolicy) -> int:
    """Confidence (0–100) that *pedestrian* is heading for *gate*."""
    return score_gate_breakdown(pedestrian, gate, policy).confidence


def score_gates(
    pedestrian: Pedestrian,
    gates: Sequence[Gate],
    policy: ValetPolicy,
) -> Dict[str, int]:
    """Confidence for every gate, in gate declaration order."""
    return {gate.id: score_gate(pedestrian, gate, policy) for gate in gates}


def find_approach_zone(
    position: Tuple[float, float],
    gates: Sequence[Gate],
    radius: float,
) -> Optional[str]:
    """Id of the gate whose approach zone contains *position*.

    Zones may overlap; the first gate in declaration order wins.
    """
    for gate in gates:
        if distance(position, gate.position) < radius:
            return gate.id
    return None


def leading_gate(confidences: Dict[str, int]) -> Tuple[Optional[str], int]:
    """``(gate_id, confidence)`` of the best gate; ties go to the first."""
    best_id: Optional[str] = None
    best = -1
    for gate_id, value in confidences.items():
        if value > best:
            best_id, best = gate_id, value
    return best_id, max(best, 0)
