#!/usr/bin/env python3
"""
valet/dispatch.py
=================
Dispatch controller: watches gate confidences tick by tick and decides
when to send a car.

States
------
``IDLE``
    Nothing dispatched.  Moves to ``DISPATCHED`` once one gate leads the
    field above ``trigger_threshold`` for ``sustain_ticks`` consecutive
    ticks.
``DISPATCHED``
    A car is committed to a gate.  Only :meth:`DispatchController.clear`
    (session stop / reset) returns to ``IDLE``.  With
    ``redirect_enabled`` the target may follow a new sustained leader;
    otherwise the trigger is not evaluated at all while dispatched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping, Optional

from valet.entities import EMPTY_DISPATCH, DispatchState, Gate, Pedestrian
from valet.geometry import distance, round_half_up
from valet.policy import ValetPolicy
from valet.scoring import leading_gate

log = logging.getLogger("dispatch")


class DispatchPhase(str, Enum):
    IDLE = "idle"
    DISPATCHED = "dispatched"


@dataclass(frozen=True)
class DispatchTransition:
    """Emitted by :meth:`DispatchController.update` when something changed."""

    kind: str                      # "dispatch" | "redirect"
    gate_id: str
    eta_s: int
    confidence: int
    previous_gate_id: Optional[str] = None


def estimate_eta_s(pedestrian: Pedestrian, gate: Gate, eta_divisor: float) -> int:
    """Whole seconds until the pedestrian reaches *gate* at current speed."""
    if pedestrian.speed <= 0.0:
        return 0
    dist = distance(pedestrian.position, gate.position)
    return round_half_up(dist / pedestrian.speed / eta_divisor)


class DispatchController:
    """Trigger / sustain / redirect state machine.

    Parameters
    ----------
    policy : ValetPolicy
        Threshold, sustain and redirect settings.
    """

    def __init__(self, policy: ValetPolicy) -> None:
        self.policy = policy
        self._state: DispatchState = EMPTY_DISPATCH
        self._streak_gate: Optional[str] = None
        self._streak = 0

    # ── Read-only view ────────────────────────────────────────────────────

    @property
    def state(self) -> DispatchState:
        return self._state

    @property
    def phase(self) -> DispatchPhase:
        return DispatchPhase.DISPATCHED if self._state.active else DispatchPhase.IDLE

    @property
    def active(self) -> bool:
        return self._state.active

    # ── Transitions ───────────────────────────────────────────────────────

    def update(
        self,
        confidences: Mapping[str, int],
        pedestrian: Pedestrian,
        gates: Mapping[str, Gate],
    ) -> Optional[DispatchTransition]:
        """Feed one tick of confidences; return the transition, if any."""
        if self._state.active and not self.policy.redirect_enabled:
            return None

        gate_id, best = leading_gate(dict(confidences))
        if gate_id is None or best <= self.policy.trigger_threshold:
            self._streak_gate, self._streak = None, 0
            return None

        if gate_id == self._streak_gate:
            self._streak += 1
        else:
            self._streak_gate, self._streak = gate_id, 1

        if self._streak < self.policy.sustain_ticks:
            return None

        gate = gates[gate_id]
        eta = estimate_eta_s(pedestrian, gate, self.policy.eta_divisor)

        if not self._state.active:
            self._state = DispatchState(active=True, gate_id=gate_id, eta_s=eta)
            log.info("dispatch gate=%s confidence=%d eta=%ds", gate_id, best, eta)
            return DispatchTransition("dispatch", gate_id, eta, best)

        if gate_id != self._state.gate_id:
            previous = self._state.gate_id
            self._state = replace(self._state, gate_id=gate_id, eta_s=eta)
            log.info("redirect %s → %s confidence=%d eta=%ds", previous, gate_id, best, eta)
            return DispatchTransition("redirect", gate_id, eta, best, previous)

        return None

    def clear(self) -> None:
        """Cancel any dispatch and forget the sustain streak."""
        if self._state.active:
            log.info("dispatch cleared gate=%s", self._state.gate_id)
        self._state = EMPTY_DISPATCH
        self._streak_gate, self._streak = None, 0
