"""
valet/session.py
================
Simulation session tying :mod:`valet.movement`, :mod:`valet.beacons`,
:mod:`valet.scoring` and :mod:`valet.dispatch` together.  The session is
the single owner of all mutable state; presentation layers read it
through immutable snapshots.

Public API consumed by :mod:`ui.pygame_view` and :mod:`valet.api`
------------------------------------------------------------------
* ``start()``                      → ``None``
* ``stop()``                       → ``None``
* ``reset()``                      → ``None``
* ``perturb_direction(offset)``    → ``float``
* ``place_pedestrian(pedestrian)`` → ``None``
* ``tick()``                       → ``SessionSnapshot``
* ``snapshot()``                   → ``SessionSnapshot``
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

from valet.beacons import active_beacon_count, beacon_strengths
from valet.dispatch import DispatchController, DispatchTransition
from valet.entities import (
    DEFAULT_BEACONS,
    DEFAULT_GATES,
    Beacon,
    ColorRGB,
    DispatchState,
    Gate,
    Pedestrian,
)
from valet.events import (
    EVENT_DIRECTION,
    EVENT_DISPATCH,
    EVENT_REDIRECT,
    EVENT_STARTED,
    EVENT_STOPPED,
    EventLog,
)
from valet.movement import perturb_heading, random_heading_offset, step
from valet.policy import PolicyError, ValetPolicy
from valet.scoring import GateScore, score_gate_breakdown
from valet.ticker import ManualTicker

log = logging.getLogger("session")


@dataclass(frozen=True)
class GateReading:
    """A gate together with this tick's score breakdown."""

    id: str
    name: str
    x: float
    y: float
    color: ColorRGB
    confidence: int = 0
    proximity: float = 0.0
    vector: float = 0.0
    dwell: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "color": self.color,
            "confidence": self.confidence,
            "proximity": self.proximity,
            "vector": self.vector,
            "dwell": self.dwell,
        }


@dataclass(frozen=True)
class BeaconReading:
    id: str
    x: float
    y: float
    strength: float = 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "strength": self.strength}


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a presentation layer needs after one tick."""

    running: bool
    tick: int
    pedestrian: Pedestrian
    gates: Tuple[GateReading, ...]
    beacons: Tuple[BeaconReading, ...]
    dispatch: DispatchState
    log: Tuple[str, ...]

    @property
    def active_beacons(self) -> int:
        return active_beacon_count({b.id: b.strength for b in self.beacons})

    def gate(self, gate_id: str) -> Optional[GateReading]:
        for reading in self.gates:
            if reading.id == gate_id:
                return reading
        return None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "running": self.running,
            "tick": self.tick,
            "pedestrian": self.pedestrian.as_dict(),
            "gates": [g.as_dict() for g in self.gates],
            "beacons": [b.as_dict() for b in self.beacons],
            "active_beacons": self.active_beacons,
            "dispatch": self.dispatch.as_dict(),
            "log": list(self.log),
        }


def _check_unique_ids(kind: str, items: Sequence[Any]) -> None:
    seen = set()
    for item in items:
        if item.id in seen:
            raise PolicyError(f"duplicate {kind} id {item.id!r}")
        seen.add(item.id)


class ValetSession:
    """One simulated pedestrian walking to one of several exit gates.

    Parameters
    ----------
    policy : ValetPolicy or None
        Tunable constants; defaults to :class:`ValetPolicy()`.
    gates : sequence of Gate or None
        Exit gates in priority order (first wins overlapping zones and
        confidence ties).  Defaults to the four-gate mall layout.
    beacons : sequence of Beacon or None
        Beacons shown on the map.
    ticker : object or None
        Anything with ``start(callback)`` / ``stop()``; a
        :class:`~valet.ticker.ManualTicker` if omitted.
    seed : int or None
        Seed for the random direction changes.
    """

    def __init__(
        self,
        policy: Optional[ValetPolicy] = None,
        gates: Optional[Sequence[Gate]] = None,
        beacons: Optional[Sequence[Beacon]] = None,
        ticker: Optional[Any] = None,
        seed: Optional[int] = None,
    ) -> None:
        self.policy = policy or ValetPolicy()
        self.gates: Tuple[Gate, ...] = tuple(DEFAULT_GATES if gates is None else gates)
        self.beacons: Tuple[Beacon, ...] = tuple(
            DEFAULT_BEACONS if beacons is None else beacons
        )
        if not self.gates:
            raise PolicyError("at least one gate is required")
        _check_unique_ids("gate", self.gates)
        _check_unique_ids("beacon", self.beacons)
        self._gates_by_id: Dict[str, Gate] = {g.id: g for g in self.gates}

        self.ticker = ticker if ticker is not None else ManualTicker()
        self._rng = random.Random(seed)
        self._lock = threading.RLock()
        # serialises start/stop/reset with the ticker call; ticks never take it
        self._lifecycle = threading.RLock()

        self._log = EventLog(capacity=self.policy.log_capacity)
        self._dispatch = DispatchController(self.policy)
        self._running = False
        self._restore_initial_state()

    # ── State helpers ─────────────────────────────────────────────────────────

    def initial_pedestrian(self) -> Pedestrian:
        p = self.policy
        return Pedestrian(
            x=p.start_x,
            y=p.start_y,
            heading_deg=p.start_heading_deg,
            speed=p.walking_speed,
        )

    def _restore_initial_state(self) -> None:
        self._tick = 0
        self._pedestrian = self.initial_pedestrian()
        self._scores: Dict[str, GateScore] = {}
        self._strengths: Dict[str, float] = {b.id: 0.0 for b in self.beacons}

    # ── Commands ──────────────────────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Begin tracking; no-op when already running."""
        with self._lifecycle:
            with self._lock:
                if self._running:
                    return
                self._running = True
                self._log.append(EVENT_STARTED, "User requested car - Starting location tracking")
            self.ticker.start(self.tick)
        log.info("session started")

    def stop(self) -> None:
        """Stop ticking and cancel any dispatch; no-op when not running."""
        with self._lifecycle:
            with self._lock:
                if not self._running:
                    return
                self._running = False
                self._dispatch.clear()
                self._log.append(EVENT_STOPPED, "Simulation stopped")
            # outside the tick lock: a tick blocked on it must be able to finish
            self.ticker.stop()
        log.info("session stopped")

    def reset(self) -> None:
        """Stop, then restore every entity and empty the log."""
        with self._lifecycle:
            self.stop()
            with self._lock:
                self._dispatch.clear()
                self._restore_initial_state()
                self._log.clear()
        log.info("session reset")

    def perturb_direction(self, offset_deg: Optional[float] = None) -> float:
        """Turn the pedestrian; a random offset is drawn when none is given.

        Returns
        -------
        float
            The offset actually applied, in degrees.
        """
        with self._lock:
            if offset_deg is None:
                offset_deg = random_heading_offset(self._rng, self.policy.perturb_spread_deg)
            self._pedestrian = perturb_heading(self._pedestrian, offset_deg)
            self._log.append(EVENT_DIRECTION, "User changed direction")
        log.debug("heading offset %.1f°", offset_deg)
        return offset_deg

    def place_pedestrian(self, pedestrian: Pedestrian) -> None:
        """Replace the pedestrian state wholesale (map click, scenarios)."""
        with self._lock:
            self._pedestrian = pedestrian

    # ── Tick ──────────────────────────────────────────────────────────────────

    def tick(self) -> SessionSnapshot:
        """Run movement → beacons → confidences → dispatch once.

        Does nothing while the session is stopped.
        """
        with self._lock:
            if not self._running:
                return self._snapshot_locked()

            self._pedestrian = step(self._pedestrian, self.gates, self.policy)
            self._strengths = beacon_strengths(
                self._pedestrian.position, self.beacons, self.policy.beacon_max_range
            )
            self._scores = {
                gate.id: score_gate_breakdown(self._pedestrian, gate, self.policy)
                for gate in self.gates
            }
            confidences = {gid: s.confidence for gid, s in self._scores.items()}

            transition = self._dispatch.update(confidences, self._pedestrian, self._gates_by_id)
            if transition is not None:
                self._record_transition(transition)

            self._tick += 1
            log.debug(
                "tick=%d pos=(%.1f, %.1f) heading=%.1f zone=%s conf=%s",
                self._tick,
                self._pedestrian.x,
                self._pedestrian.y,
                self._pedestrian.heading_deg,
                self._pedestrian.approach_zone,
                confidences,
            )
            return self._snapshot_locked()

    def _record_transition(self, transition: DispatchTransition) -> None:
        gate = self._gates_by_id[transition.gate_id]
        if transition.kind == "redirect":
            previous = self._gates_by_id[transition.previous_gate_id]
            self._log.append(
                EVENT_REDIRECT,
                f"DISPATCH REDIRECTED: Car rerouted from {previous.name} to "
                f"{gate.name} (ETA: {transition.eta_s}s)",
            )
        else:
            self._log.append(
                EVENT_DISPATCH,
                f"DISPATCH TRIGGERED: Car dispatched to {gate.name} "
                f"(ETA: {transition.eta_s}s)",
            )

    # ── Snapshot ──────────────────────────────────────────────────────────────

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> SessionSnapshot:
        gates = []
        for gate in self.gates:
            score = self._scores.get(gate.id)
            if score is None:
                gates.append(GateReading(gate.id, gate.name, gate.x, gate.y, gate.color))
            else:
                gates.append(GateReading(
                    gate.id, gate.name, gate.x, gate.y, gate.color,
                    confidence=score.confidence,
                    proximity=score.proximity,
                    vector=score.vector,
                    dwell=score.dwell,
                ))
        beacons = tuple(
            BeaconReading(b.id, b.x, b.y, self._strengths.get(b.id, 0.0))
            for b in self.beacons
        )
        return SessionSnapshot(
            running=self._running,
            tick=self._tick,
            pedestrian=self._pedestrian,
            gates=tuple(gates),
            beacons=beacons,
            dispatch=self._dispatch.state,
            log=tuple(self._log.lines()),
        )
