"""Recent engine events: rollovers and next-crossing changes."""
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Query

from nyewave.utils.wave_events import get_wave_event_handler

router = APIRouter(prefix="/api/events", tags=["events"])

EventKind = Literal["tracking", "rollover", "next_crossing", "all_crossed"]


@router.get("", response_model=dict)
def list_events(
    limit: int = Query(50, ge=1, le=200),
    event: Optional[EventKind] = Query(default=None, description="Only this event kind"),
) -> dict:
    handler = get_wave_event_handler()
    entries = handler.get_entries(limit, event)
    return {
        "entries": entries,
        "count": len(entries),
        "limit": limit,
        "available": handler.size(),
        "capacity": handler.capacity,
    }


@router.delete("", response_model=dict)
def clear_events() -> dict:
    get_wave_event_handler().clear()
    return {"cleared": True}
