"""Compute the UTC instant at which each zone's clock reaches New Year."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from operator import attrgetter
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from nyewave.utils.time_utils import to_millis

logger = logging.getLogger("nyewave.crossings")


@dataclass(frozen=True)
class ZoneCrossing:
    zone: str
    instant: int
    offset_minutes: int


def next_target_year(now: datetime) -> int:
    """The year whose New Year is still ahead of ``now`` in UTC."""
    return now.astimezone(timezone.utc).year + 1


def resolve_crossing(zone: str, year: int) -> ZoneCrossing | None:
    """Resolve local ``year-01-01T00:00:00`` in ``zone``.

    Returns None when the host cannot resolve the zone. A midnight that falls in a
    DST gap resolves to the transition instant, reported with the offset in effect
    after it.
    """
    try:
        tz = ZoneInfo(zone)
        local_midnight = datetime(year, 1, 1, tzinfo=tz)
        instant = local_midnight.astimezone(timezone.utc)
        offset = instant.astimezone(tz).utcoffset()
    except (ZoneInfoNotFoundError, ValueError, OverflowError) as exc:
        logger.debug("Skipping zone %r for %s: %s", zone, year, exc)
        return None
    if offset is None:  # pragma: no cover - ZoneInfo always reports an offset
        return None
    return ZoneCrossing(
        zone=zone,
        instant=to_millis(instant),
        offset_minutes=int(offset.total_seconds() / 60),
    )


def build_crossings(year: int, zones: Iterable[str]) -> list[ZoneCrossing]:
    """Return every resolvable zone's crossing, ascending by instant.

    The sort is stable, so zones with identical instants keep catalog order.
    """
    zone_list = list(zones)
    items = [crossing for crossing in (resolve_crossing(zone, year) for zone in zone_list) if crossing]
    items.sort(key=attrgetter("instant"))
    dropped = len(zone_list) - len(items)
    if dropped:
        logger.info("Dropped %s unresolvable zone(s) while building %s crossings", dropped, year)
    return items
