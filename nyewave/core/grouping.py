"""Collapse zones that reach New Year at the same instant."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from nyewave.core.crossings import ZoneCrossing


@dataclass(frozen=True)
class CrossingGroup:
    instant: int
    zones: tuple[str, ...]
    # Offset of the first zone in the group; members may differ.
    offset_minutes: int

    @property
    def size(self) -> int:
        return len(self.zones)


def group_by_instant(crossings: Iterable[ZoneCrossing]) -> list[CrossingGroup]:
    """Merge adjacent crossings that share an instant. Input must be sorted by instant."""
    pending: list[tuple[int, list[str], int]] = []
    for crossing in crossings:
        if pending and pending[-1][0] == crossing.instant:
            pending[-1][1].append(crossing.zone)
        else:
            pending.append((crossing.instant, [crossing.zone], crossing.offset_minutes))
    return [
        CrossingGroup(instant=instant, zones=tuple(zones), offset_minutes=offset)
        for instant, zones, offset in pending
    ]
