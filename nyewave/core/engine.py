"""Countdown engine owning the target year and the cached crossing table."""
from __future__ import annotations

import logging
from datetime import datetime
from threading import Lock
from typing import Iterable, Protocol

from nyewave.config.timezones import ZoneCatalog
from nyewave.core.crossings import ZoneCrossing, build_crossings, next_target_year
from nyewave.core.formatting import GROUP_PREVIEW_LIMIT, format_utc
from nyewave.core.view import ViewState, derive_view
from nyewave.utils.time_utils import SystemClock, ensure_utc, to_millis
from nyewave.utils.wave_events import (
    EVENT_ALL_CROSSED,
    EVENT_NEXT_CROSSING,
    EVENT_ROLLOVER,
    EVENT_TRACKING,
    event_extra,
)

logger = logging.getLogger("nyewave.engine")


class TimeSource(Protocol):
    def now(self) -> datetime: ...


class CountdownEngine:
    """Derives view snapshots for the next New Year and rolls over when it arrives.

    The catalog and crossing table are computed once per target year; every call to
    :meth:`derive` only filters, groups and counts.
    """

    def __init__(
        self,
        catalog: ZoneCatalog | Iterable[str],
        clock: TimeSource | None = None,
        *,
        preview_limit: int = GROUP_PREVIEW_LIMIT,
        target_year: int | None = None,
    ) -> None:
        self.catalog = catalog if isinstance(catalog, ZoneCatalog) else ZoneCatalog.from_names(catalog)
        self.clock = clock or SystemClock()
        self.preview_limit = preview_limit
        self._lock = Lock()
        self.target_year = target_year or next_target_year(self.clock.now())
        self.crossings: list[ZoneCrossing] = build_crossings(self.target_year, self.catalog)
        self.last_next_key: str | None = None
        logger.info(
            "Tracking New Year %s across %s/%s zones",
            self.target_year,
            len(self.crossings),
            len(self.catalog),
            extra=event_extra(EVENT_TRACKING, self.target_year),
        )

    @property
    def dropped_count(self) -> int:
        return len(self.catalog) - len(self.crossings)

    def roll_over(self, now: datetime) -> bool:
        """Advance the target year once ``now`` has reached it. Returns True on rollover."""
        now = ensure_utc(now)
        with self._lock:
            if now.year < self.target_year:
                return False
            previous = self.target_year
            self.target_year = next_target_year(now)
            self.crossings = build_crossings(self.target_year, self.catalog)
            self.last_next_key = None
        logger.info(
            "Rolled over from %s to %s",
            previous,
            self.target_year,
            extra=event_extra(EVENT_ROLLOVER, self.target_year),
        )
        return True

    def derive(self, now: datetime | None = None, filter_text: str = "", dedupe: bool = False) -> ViewState:
        now = ensure_utc(now) if now is not None else self.clock.now()
        self.roll_over(now)
        state = derive_view(
            self.crossings,
            to_millis(now),
            filter_text,
            dedupe,
            target_year=self.target_year,
            preview_limit=self.preview_limit,
            catalog_size=len(self.catalog),
        )
        return state

    def track_next(self, state: ViewState) -> bool:
        """Remember the next pending row; returns True when it changed since last time."""
        row = state.next_row
        key = row.key if row is not None and row.instant > state.now else None
        if key == self.last_next_key:
            return False
        self.last_next_key = key
        if row is not None and key is not None:
            logger.info(
                "Next crossing: %s at %s",
                row.label,
                format_utc(row.instant),
                extra=event_extra(EVENT_NEXT_CROSSING, state.target_year, row.label, row.instant),
            )
        else:
            logger.info(
                "All %s rows have crossed into %s",
                state.total_count,
                state.target_year,
                extra=event_extra(EVENT_ALL_CROSSED, state.target_year),
            )
        return True
