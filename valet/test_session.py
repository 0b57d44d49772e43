#!/usr/bin/env python3
"""
Session-level scenarios: command semantics, activity log and tickers.
"""

from __future__ import annotations

import threading
import time
import unittest

from valet.entities import DEFAULT_GATES, Beacon, Gate, Pedestrian
from valet.events import EVENT_DISPATCH, EventLog
from valet.policy import PolicyError, ValetPolicy
from valet.session import ValetSession
from valet.ticker import ManualTicker, ThreadTicker

START_MSG = "User requested car - Starting location tracking"
NORTH_DISPATCH = "DISPATCH TRIGGERED: Car dispatched to North Gate (ETA: 1s)"


def near_north_gate() -> Pedestrian:
    """10 units left of gate A, facing it, already dwelling in its zone."""
    return Pedestrian(x=390.0, y=50.0, heading_deg=0.0, speed=1.2,
                      approach_zone="A", dwell_s=60.0)


def messages(snap):
    return [line.split("] ", 1)[1] for line in snap.log]


class CommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ticker = ManualTicker()
        self.session = ValetSession(ticker=self.ticker, seed=1)

    def test_initial_snapshot(self) -> None:
        snap = self.session.snapshot()
        self.assertFalse(snap.running)
        self.assertEqual(snap.tick, 0)
        self.assertEqual((snap.pedestrian.x, snap.pedestrian.y), (400.0, 300.0))
        self.assertEqual(snap.pedestrian.heading_deg, 0.0)
        self.assertEqual(snap.pedestrian.speed, 1.2)
        self.assertIsNone(snap.pedestrian.approach_zone)
        self.assertEqual([g.id for g in snap.gates], ["A", "B", "C", "D"])
        self.assertTrue(all(g.confidence == 0 for g in snap.gates))
        self.assertEqual(len(snap.beacons), 12)
        self.assertEqual(snap.active_beacons, 0)
        self.assertFalse(snap.dispatch.active)
        self.assertEqual(snap.log, ())

    def test_tick_while_stopped_is_noop(self) -> None:
        before = self.session.snapshot()
        after = self.session.tick()
        self.assertEqual(before, after)

    def test_start_is_idempotent(self) -> None:
        self.session.start()
        self.session.start()
        snap = self.session.snapshot()
        self.assertTrue(snap.running)
        self.assertEqual(messages(snap), [START_MSG])
        self.assertTrue(self.ticker.running)

    def test_stop_when_idle_is_noop(self) -> None:
        self.session.stop()
        self.assertEqual(self.session.snapshot().log, ())

    def test_start_then_tick_moves_pedestrian(self) -> None:
        self.session.start()
        self.assertEqual(self.ticker.advance(1), 1)
        snap = self.session.snapshot()
        self.assertEqual(snap.tick, 1)
        self.assertAlmostEqual(snap.pedestrian.x, 401.2)
        self.assertEqual(snap.active_beacons, 1)
        for gate in snap.gates:
            self.assertTrue(0 <= gate.confidence <= 100)

    def test_log_is_newest_first(self) -> None:
        self.session.start()
        self.session.perturb_direction(10.0)
        self.session.stop()
        self.assertEqual(
            messages(self.session.snapshot()),
            ["Simulation stopped", "User changed direction", START_MSG],
        )

    def test_log_keeps_last_ten(self) -> None:
        self.session.start()
        for _ in range(15):
            self.session.perturb_direction(1.0)
        log = messages(self.session.snapshot())
        self.assertEqual(len(log), 10)
        self.assertNotIn(START_MSG, log)

    def test_log_line_has_time_prefix(self) -> None:
        self.session.start()
        line = self.session.snapshot().log[0]
        self.assertRegex(line, r"^\[\d\d:\d\d:\d\d\] ")

    def test_perturb_explicit_offset(self) -> None:
        applied = self.session.perturb_direction(-20.0)
        self.assertEqual(applied, -20.0)
        self.assertAlmostEqual(self.session.snapshot().pedestrian.heading_deg, 340.0)

    def test_perturb_random_offset_is_seeded(self) -> None:
        other = ValetSession(seed=1)
        a = [self.session.perturb_direction() for _ in range(5)]
        b = [other.perturb_direction() for _ in range(5)]
        self.assertEqual(a, b)
        for offset in a:
            self.assertTrue(-30.0 <= offset < 30.0)

    def test_reset_matches_fresh_session(self) -> None:
        self.session.start()
        self.session.perturb_direction(45.0)
        self.ticker.advance(30)
        self.session.reset()
        self.assertEqual(self.session.snapshot(), ValetSession().snapshot())
        self.assertFalse(self.ticker.running)

    def test_reset_when_idle(self) -> None:
        self.session.perturb_direction(90.0)
        self.session.reset()
        self.assertEqual(self.session.snapshot(), ValetSession().snapshot())


class DispatchScenarioTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ticker = ManualTicker()
        self.session = ValetSession(ticker=self.ticker)

    def test_dispatch_near_gate(self) -> None:
        self.session.place_pedestrian(near_north_gate())
        self.session.start()
        self.ticker.advance(1)
        snap = self.session.snapshot()
        self.assertEqual(snap.gate("A").confidence, 99)
        self.assertTrue(snap.dispatch.active)
        self.assertEqual(snap.dispatch.gate_id, "A")
        self.assertEqual(snap.dispatch.eta_s, 1)
        self.assertEqual(messages(snap), [NORTH_DISPATCH, START_MSG])

    def test_dispatch_logged_once(self) -> None:
        self.session.place_pedestrian(near_north_gate())
        self.session.start()
        self.ticker.advance(5)
        snap = self.session.snapshot()
        self.assertEqual(messages(snap).count(NORTH_DISPATCH), 1)
        self.assertEqual(snap.dispatch.eta_s, 1)

    def test_stop_clears_dispatch(self) -> None:
        self.session.place_pedestrian(near_north_gate())
        self.session.start()
        self.ticker.advance(1)
        self.session.stop()
        snap = self.session.snapshot()
        self.assertFalse(snap.running)
        self.assertFalse(snap.dispatch.active)
        self.assertEqual(messages(snap)[0], "Simulation stopped")
        # position is kept on stop
        self.assertAlmostEqual(snap.pedestrian.x, 391.2)

    def test_reset_after_dispatch_restores_initial_state(self) -> None:
        self.session.place_pedestrian(near_north_gate())
        self.session.start()
        for _ in range(10):
            self.ticker.advance(1)
            if self.session.snapshot().dispatch.active:
                break
        self.assertTrue(self.session.snapshot().dispatch.active)
        self.session.reset()
        self.assertEqual(self.session.snapshot(), ValetSession().snapshot())

    def test_restart_can_dispatch_again(self) -> None:
        self.session.place_pedestrian(near_north_gate())
        self.session.start()
        self.ticker.advance(1)
        self.session.stop()
        self.session.start()
        self.ticker.advance(1)
        self.assertTrue(self.session.snapshot().dispatch.active)

    def test_redirect_logged(self) -> None:
        gates = (
            Gate("W", "West Door", 100.0, 300.0, (0, 0, 0)),
            Gate("E", "East Door", 300.0, 300.0, (0, 0, 0)),
        )
        session = ValetSession(
            policy=ValetPolicy(redirect_enabled=True), gates=gates, beacons=(), ticker=self.ticker
        )
        session.place_pedestrian(Pedestrian(95.0, 300.0, 0.0, 1.2, "W", 60.0))
        session.start()
        self.ticker.advance(1)
        self.assertEqual(session.snapshot().dispatch.gate_id, "W")
        session.place_pedestrian(Pedestrian(295.0, 300.0, 0.0, 1.2, "E", 60.0))
        self.ticker.advance(1)
        snap = session.snapshot()
        self.assertEqual(snap.dispatch.gate_id, "E")
        self.assertTrue(messages(snap)[0].startswith(
            "DISPATCH REDIRECTED: Car rerouted from West Door to East Door"
        ))


class ValidationTests(unittest.TestCase):
    def test_empty_gates_rejected(self) -> None:
        with self.assertRaises(PolicyError):
            ValetSession(gates=())

    def test_duplicate_gate_ids_rejected(self) -> None:
        with self.assertRaises(PolicyError):
            ValetSession(gates=(DEFAULT_GATES[0], DEFAULT_GATES[0]))

    def test_duplicate_beacon_ids_rejected(self) -> None:
        with self.assertRaises(PolicyError):
            ValetSession(beacons=(Beacon("X", 0.0, 0.0), Beacon("X", 1.0, 1.0)))

    def test_policy_rejects_bad_values(self) -> None:
        for kwargs in (
            {"gate_max_distance": 0.0},
            {"tick_interval_ms": 0},
            {"trigger_threshold": 150.0},
            {"proximity_weight": 0.9},
            {"walking_speed": -1.0},
            {"start_x": 10.0},
            {"wall_margin": 400.0},
        ):
            with self.subTest(**kwargs), self.assertRaises(PolicyError):
                ValetPolicy(**kwargs)

    def test_policy_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            ValetPolicy(sustain_ticks=0)


class EventLogTests(unittest.TestCase):
    def test_capacity_and_order(self) -> None:
        clock = iter(range(100)).__next__
        log = EventLog(capacity=3, clock=lambda: float(clock()))
        for i in range(5):
            log.append(EVENT_DISPATCH, f"msg {i}")
        self.assertEqual(len(log), 3)
        self.assertEqual([e.message for e in log.entries()], ["msg 4", "msg 3", "msg 2"])
        self.assertEqual(len({e.id for e in log.entries()}), 3)
        log.clear()
        self.assertEqual(log.lines(), [])

    def test_rejects_zero_capacity(self) -> None:
        with self.assertRaises(ValueError):
            EventLog(capacity=0)


class GatedStopTicker(ThreadTicker):
    """Thread ticker whose stop() waits for a release signal."""

    def __init__(self, interval_s: float) -> None:
        super().__init__(interval_s)
        self.stopping = threading.Event()
        self.release = threading.Event()

    def stop(self) -> None:
        self.stopping.set()
        self.release.wait(2.0)
        super().stop()


def wait_for_tick(session: ValetSession, above: int, timeout: float = 2.0) -> int:
    deadline = time.time() + timeout
    while session.snapshot().tick <= above and time.time() < deadline:
        time.sleep(0.01)
    return session.snapshot().tick


class TickerTests(unittest.TestCase):
    def test_manual_advance_counts(self) -> None:
        ticker = ManualTicker()
        calls = []
        self.assertEqual(ticker.advance(3), 0)
        ticker.start(lambda: calls.append(1))
        self.assertEqual(ticker.advance(3), 3)
        self.assertEqual(len(calls), 3)

    def test_manual_stops_early_when_tick_stops(self) -> None:
        ticker = ManualTicker()
        calls = []

        def tick():
            calls.append(1)
            if len(calls) == 2:
                ticker.stop()

        ticker.start(tick)
        self.assertEqual(ticker.advance(10), 2)

    def test_thread_ticker_drives_session(self) -> None:
        ticker = ThreadTicker(0.01)
        session = ValetSession(ticker=ticker)
        session.start()
        try:
            deadline = time.time() + 2.0
            while session.snapshot().tick < 3 and time.time() < deadline:
                time.sleep(0.01)
        finally:
            session.stop()
        self.assertGreaterEqual(session.snapshot().tick, 3)
        self.assertFalse(ticker.running)
        frozen = session.snapshot().tick
        time.sleep(0.05)
        self.assertEqual(session.snapshot().tick, frozen)

    def test_thread_ticker_logs_tick_errors(self) -> None:
        ticker = ThreadTicker(0.01)
        fired = threading.Event()

        def boom():
            fired.set()
            raise RuntimeError("boom")

        with self.assertLogs("ticker", level="ERROR") as cm:
            ticker.start(boom)
            fired.wait(2.0)
            time.sleep(0.02)
            ticker.stop()
        self.assertTrue(any("tick error" in line for line in cm.output))

    def test_start_during_stop_leaves_session_ticking(self) -> None:
        ticker = GatedStopTicker(0.01)
        session = ValetSession(ticker=ticker)
        session.start()
        try:
            self.assertGreaterEqual(wait_for_tick(session, 0), 1)
            stopper = threading.Thread(target=session.stop)
            stopper.start()
            self.assertTrue(ticker.stopping.wait(2.0))
            starter = threading.Thread(target=session.start)
            starter.start()
            time.sleep(0.05)
            ticker.release.set()
            stopper.join(2.0)
            starter.join(2.0)

            self.assertTrue(session.running)
            self.assertTrue(ticker.running)
            before = session.snapshot().tick
            self.assertGreater(wait_for_tick(session, before), before)
        finally:
            ticker.release.set()
            session.stop()

    def test_slow_tick_does_not_outlive_stop(self) -> None:
        ticker = ThreadTicker(0.01, join_timeout_s=0.05)
        entered = threading.Event()
        release = threading.Event()
        old_calls = []
        new_calls = []

        def slow():
            old_calls.append(1)
            entered.set()
            release.wait(2.0)

        ticker.start(slow)
        self.assertTrue(entered.wait(2.0))
        with self.assertLogs("ticker", level="WARNING") as cm:
            ticker.stop()
        self.assertTrue(any("did not exit" in line for line in cm.output))

        ticker.start(lambda: new_calls.append(1))
        release.set()
        deadline = time.time() + 2.0
        while len(new_calls) < 3 and time.time() < deadline:
            time.sleep(0.01)
        ticker.stop()
        self.assertGreaterEqual(len(new_calls), 3)
        self.assertEqual(len(old_calls), 1)

    def test_rejects_non_positive_interval(self) -> None:
        with self.assertRaises(ValueError):
            ThreadTicker(0.0)


if __name__ == "__main__":
    unittest.main()
