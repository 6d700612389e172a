"""Pydantic models shared across API routes."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from nyewave.core.formatting import (
    format_countdown,
    format_in_zone,
    format_offset,
    format_utc,
    heading,
    page_title,
)
from nyewave.core.view import ViewState, info_caption, progress_caption
from nyewave.utils.time_utils import from_millis


class DisplayRowOut(BaseModel):
    position: int = Field(description="1-based position in the wave")
    key: str
    label: str
    detail: str
    zones: List[str]
    instant: int = Field(description="Crossing instant in epoch milliseconds")
    offset_minutes: int
    offset: str
    utc: str
    reference_local: str
    status: str
    countdown: str


class WaveResponse(BaseModel):
    title: str
    heading: str
    target_year: int
    now: int
    now_utc: str
    filter: str
    dedupe: bool
    empty: bool
    rows: List[DisplayRowOut]
    next_index: Optional[int]
    next_key: Optional[str]
    crossed_count: int
    total_count: int
    catalog_size: int
    progress: str
    info: str

    @classmethod
    def from_state(cls, state: ViewState, *, reference_timezone: str) -> "WaveResponse":
        rows = [
            DisplayRowOut(
                position=index + 1,
                key=row.key,
                label=row.label,
                detail=row.detail,
                zones=list(row.zones),
                instant=row.instant,
                offset_minutes=row.offset_minutes,
                offset=format_offset(row.offset_minutes),
                utc=format_utc(row.instant),
                reference_local=format_in_zone(row.instant, reference_timezone),
                status=state.status(index),
                countdown=state.countdown(row),
            )
            for index, row in enumerate(state.rows)
        ]
        return cls(
            title=page_title(state.target_year),
            heading=heading(state.target_year),
            target_year=state.target_year,
            now=state.now,
            now_utc=from_millis(state.now).isoformat(),
            filter=state.filter_text,
            dedupe=state.dedupe,
            empty=state.is_empty,
            rows=rows,
            next_index=state.next_index,
            next_key=state.next_key,
            crossed_count=state.crossed_count,
            total_count=state.total_count,
            catalog_size=state.catalog_size,
            progress=progress_caption(state),
            info=info_caption(state),
        )


class NextCrossingResponse(BaseModel):
    target_year: int
    pending: bool
    label: Optional[str] = None
    zones: List[str] = Field(default_factory=list)
    instant: Optional[int] = None
    utc: Optional[str] = None
    countdown: str
    next_in: int = Field(default=0, description="Milliseconds until the crossing, 0 once passed")

    @classmethod
    def from_state(cls, state: ViewState) -> "NextCrossingResponse":
        row = state.next_row
        if row is None:
            return cls(target_year=state.target_year, pending=False, countdown=format_countdown(0))
        return cls(
            target_year=state.target_year,
            pending=row.instant > state.now,
            label=row.label,
            zones=list(row.zones),
            instant=row.instant,
            utc=format_utc(row.instant),
            countdown=state.countdown(row),
            next_in=state.next_in,
        )
