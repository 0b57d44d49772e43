"""
Activity log: a short, newest-first record of what happened during a run.

Supports:
    - Typed events (started, stopped, direction, dispatch, redirect)
    - A fixed retention window; older entries fall off the end
    - Mirroring every entry to the ``valet.events`` logger
"""

import logging
import time
import uuid
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Deque, List

log = logging.getLogger(__name__)

EVENT_STARTED = "started"
EVENT_STOPPED = "stopped"
EVENT_DIRECTION = "direction"
EVENT_DISPATCH = "dispatch"
EVENT_REDIRECT = "redirect"


@dataclass(frozen=True)
class ActivityEvent:
    """
    A single entry in the activity log.

    Attributes:
        id (str): Unique identifier for the event.
        kind (str): One of the ``EVENT_*`` constants.
        message (str): Human-readable description.
        ts (float): Timestamp (in seconds) when the event was recorded.
    """
    id: str
    kind: str
    message: str
    ts: float

    def line(self) -> str:
        """Render as ``[HH:MM:SS] message`` for the activity panel."""
        stamp = datetime.fromtimestamp(self.ts).strftime("%H:%M:%S")
        return f"[{stamp}] {self.message}"


class EventLog:
    """
    Capped, newest-first activity log.

    Attributes:
        capacity (int): Number of entries retained.
    """

    def __init__(self, capacity: int = 10, clock: Callable[[], float] = time.time):
        """
        Args:
            capacity (int): Entries retained before the oldest is discarded.
            clock (callable): Source of timestamps, ``time.time`` by default.
        """
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity!r}")
        self.capacity = capacity
        self._clock = clock
        self._entries: Deque[ActivityEvent] = deque(maxlen=capacity)

    def append(self, kind: str, message: str) -> ActivityEvent:
        """
        Record an event at the head of the log.

        Args:
            kind (str): Event type, e.g. ``EVENT_DISPATCH``.
            message (str): Text shown to the operator.

        Returns:
            ActivityEvent: The stored entry.
        """
        event = ActivityEvent(
            id=str(uuid.uuid4()),
            kind=kind,
            message=message,
            ts=self._clock(),
        )
        self._entries.appendleft(event)
        log.info("event kind=%s %s", kind, message)
        return event

    def entries(self) -> List[ActivityEvent]:
        """Retained events, newest first."""
        return list(self._entries)

    def lines(self) -> List[str]:
        return [event.line() for event in self._entries]

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
