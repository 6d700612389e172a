"""Derive the rows, next pending crossing and progress counters for one render."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from nyewave.core.crossings import ZoneCrossing
from nyewave.core.formatting import (
    GROUP_PREVIEW_LIMIT,
    format_countdown,
    format_group_detail,
    format_utc,
)
from nyewave.core.grouping import group_by_instant
from nyewave.utils.time_utils import from_millis

STATUS_DONE = "done"
STATUS_NEXT = "next"
STATUS_PENDING = "pending"


@dataclass(frozen=True)
class DisplayRow:
    instant: int
    label: str
    detail: str
    offset_minutes: int
    zones: tuple[str, ...]

    @property
    def key(self) -> str:
        return f"{self.instant}:{self.label}"


@dataclass(frozen=True)
class ViewState:
    target_year: int
    now: int
    filter_text: str
    dedupe: bool
    rows: tuple[DisplayRow, ...]
    next_index: int | None
    crossed_count: int
    total_count: int
    catalog_size: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def next_row(self) -> DisplayRow | None:
        if self.next_index is None:
            return None
        return self.rows[self.next_index]

    @property
    def next_key(self) -> str | None:
        row = self.next_row
        return row.key if row else None

    @property
    def next_in(self) -> int:
        """Milliseconds until the next row, or 0 once every row has crossed."""
        row = self.next_row
        if row is None:
            return 0
        return max(row.instant - self.now, 0)

    def countdown(self, row: DisplayRow) -> str:
        return format_countdown(row.instant - self.now)

    def status(self, index: int) -> str:
        row = self.rows[index]
        if row.instant <= self.now:
            return STATUS_DONE
        if index == self.next_index:
            return STATUS_NEXT
        return STATUS_PENDING


def _rows_for_crossings(crossings: Sequence[ZoneCrossing]) -> list[DisplayRow]:
    return [
        DisplayRow(
            instant=item.instant,
            label=item.zone,
            detail="",
            offset_minutes=item.offset_minutes,
            zones=(item.zone,),
        )
        for item in crossings
    ]


def _rows_for_groups(crossings: Sequence[ZoneCrossing], preview_limit: int) -> list[DisplayRow]:
    rows: list[DisplayRow] = []
    for group in group_by_instant(crossings):
        label = group.zones[0] if group.size == 1 else f"{group.size} zones"
        rows.append(
            DisplayRow(
                instant=group.instant,
                label=label,
                detail=format_group_detail(group.zones, preview_limit),
                offset_minutes=group.offset_minutes,
                zones=group.zones,
            )
        )
    return rows


def filter_crossings(crossings: Sequence[ZoneCrossing], filter_text: str) -> list[ZoneCrossing]:
    """Keep crossings whose zone contains ``filter_text``, ignoring case."""
    needle = filter_text.strip().lower()
    if not needle:
        return list(crossings)
    return [item for item in crossings if needle in item.zone.lower()]


def derive_view(
    crossings: Sequence[ZoneCrossing],
    now: int,
    filter_text: str = "",
    dedupe: bool = False,
    *,
    target_year: int,
    preview_limit: int = GROUP_PREVIEW_LIMIT,
    catalog_size: int = 0,
) -> ViewState:
    """Build a :class:`ViewState` from crossings already sorted by instant.

    ``now`` is in epoch milliseconds. The function has no side effects.
    """
    visible = filter_crossings(crossings, filter_text)
    if dedupe:
        rows = _rows_for_groups(visible, preview_limit)
    else:
        rows = _rows_for_crossings(visible)

    next_index: int | None = None
    if rows:
        next_index = next((idx for idx, row in enumerate(rows) if row.instant > now), len(rows) - 1)

    return ViewState(
        target_year=target_year,
        now=now,
        filter_text=filter_text.strip(),
        dedupe=dedupe,
        rows=tuple(rows),
        next_index=next_index,
        crossed_count=sum(1 for row in rows if row.instant <= now),
        total_count=len(rows),
        catalog_size=catalog_size,
    )


def progress_caption(state: ViewState) -> str:
    caption = f"{state.crossed_count} / {state.total_count} crossed into {state.target_year}. "
    row = state.next_row
    if row is not None and row.instant > state.now:
        caption += f"Next in {state.countdown(row)} ({format_utc(row.instant)})."
    return caption


def info_caption(state: ViewState) -> str:
    kind = "entries (grouped)" if state.dedupe else "timezones"
    current = from_millis(state.now).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return (
        f"Showing {state.total_count} {kind} out of {state.catalog_size}. "
        f"Current UTC: {current}"
    )
