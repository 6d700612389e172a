"""Rolling journal of engine events: tracking start, rollovers and next-crossing changes."""
from __future__ import annotations

import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, List

EVENT_TRACKING = "tracking"
EVENT_ROLLOVER = "rollover"
EVENT_NEXT_CROSSING = "next_crossing"
EVENT_ALL_CROSSED = "all_crossed"


def event_extra(event: str, target_year: int, zone: str | None = None, instant: int | None = None) -> dict:
    """``extra=`` payload for a log call that should land in the journal."""
    return {"wave_event": event, "target_year": target_year, "zone": zone, "instant": instant}


class WaveEventHandler(logging.Handler):
    """Logging handler that keeps only records tagged with a ``wave_event``."""

    def __init__(self, capacity: int = 200) -> None:
        super().__init__()
        self.capacity = capacity
        self._entries: Deque[dict[str, Any]] = deque(maxlen=capacity)
        self._lock = Lock()

    def emit(self, record: logging.LogRecord) -> None:
        event = getattr(record, "wave_event", None)
        if event is None:
            return
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "event": event,
            "target_year": getattr(record, "target_year", None),
            "zone": getattr(record, "zone", None),
            "instant": getattr(record, "instant", None),
            "message": record.getMessage(),
        }
        with self._lock:
            self._entries.append(entry)

    def get_entries(self, limit: int, event: str | None = None) -> List[dict[str, Any]]:
        """Return up to ``limit`` entries, oldest first, optionally of one event kind."""
        with self._lock:
            entries = [entry for entry in self._entries if event is None or entry["event"] == event]
        if limit <= 0:
            return entries
        return entries[-limit:]

    def latest(self, event: str) -> dict[str, Any] | None:
        entries = self.get_entries(1, event)
        return entries[0] if entries else None

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_wave_event_handler: WaveEventHandler | None = None


def get_wave_event_handler(capacity: int = 200) -> WaveEventHandler:
    """Return the singleton engine event journal."""
    global _wave_event_handler
    if _wave_event_handler is None:
        _wave_event_handler = WaveEventHandler(capacity=capacity)
    return _wave_event_handler
