#!/usr/bin/env python3
"""
valet/ticker.py
===============
Drivers that decide *when* a session ticks.

:class:`ThreadTicker`
    Background daemon thread calling the tick at a fixed rate — used by
    the Pygame view and the REST API.
:class:`ManualTicker`
    Ticks only when told to — used by tests and the headless runner.

Both expose the same ``start(callback)`` / ``stop()`` / ``running``
surface, and both are idempotent.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

log = logging.getLogger("ticker")

TickCallback = Callable[[], object]


class ThreadTicker:
    """Fixed-rate ticker running in a background thread.

    Parameters
    ----------
    interval_s : float
        Seconds between tick starts.
    join_timeout_s : float
        How long :meth:`stop` waits for a running tick to finish.
    """

    def __init__(self, interval_s: float, join_timeout_s: float = 2.0) -> None:
        if interval_s <= 0:
            raise ValueError(f"interval_s must be positive, got {interval_s!r}")
        self.interval_s = interval_s
        self.join_timeout_s = join_timeout_s
        self._callback: Optional[TickCallback] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def start(self, callback: TickCallback) -> None:
        """Spawn the tick thread (no-op if already running)."""
        if self.running:
            return
        self._callback = callback
        # one event per thread: a loop that outlived its stop() stays stopped
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._loop,
            args=(self._stop_event, callback),
            daemon=True,
            name="ValetTicker",
        )
        self._thread.start()
        log.info("ticker started at %.1f Hz", 1.0 / self.interval_s)

    def stop(self) -> None:
        """Signal the thread to stop and wait for it to join."""
        thread = self._thread
        if thread is None:
            return
        self._stop_event.set()
        # may be called from inside a tick
        if thread is not threading.current_thread():
            thread.join(timeout=self.join_timeout_s)
            if thread.is_alive():
                log.warning("ticker thread did not exit within %.1f s", self.join_timeout_s)
        self._thread = None
        self._callback = None
        log.info("ticker stopped")

    # ── Background loop ───────────────────────────────────────────────────────

    def _loop(self, stop_event: threading.Event, callback: TickCallback) -> None:
        while not stop_event.is_set():
            t0 = time.perf_counter()
            try:
                callback()
            except Exception:
                log.exception("tick error")
            stop_event.wait(max(0.0, self.interval_s - (time.perf_counter() - t0)))


class ManualTicker:
    """Ticker driven explicitly through :meth:`advance`."""

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        if self._callback is None:
            self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, ticks: int = 1) -> int:
        """Run up to *ticks* ticks; returns how many actually ran.

        Stops early if a tick stops the ticker.
        """
        done = 0
        for _ in range(ticks):
            callback = self._callback
            if callback is None:
                break
            callback()
            done += 1
        return done
