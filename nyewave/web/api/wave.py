"""Wave endpoints: the derived view for a filter/dedupe combination."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from nyewave.config.settings import Settings
from nyewave.core.engine import CountdownEngine

from . import deps
from .schemas import NextCrossingResponse, WaveResponse

router = APIRouter(prefix="/api/wave", tags=["wave"])


@router.get("", response_model=WaveResponse)
async def get_wave(
    filter: str = Query("", max_length=100, description="Case-insensitive zone substring"),
    dedupe: Optional[bool] = Query(default=None, description="Group zones crossing at the same instant"),
    engine: CountdownEngine = Depends(deps.get_engine),
    settings: Settings = Depends(deps.get_app_settings),
) -> WaveResponse:
    if dedupe is None:
        dedupe = settings.default_dedupe
    state = engine.derive(filter_text=filter, dedupe=dedupe)
    return WaveResponse.from_state(state, reference_timezone=settings.reference_timezone)


@router.get("/next", response_model=NextCrossingResponse)
async def get_next(
    filter: str = Query("", max_length=100),
    engine: CountdownEngine = Depends(deps.get_engine),
) -> NextCrossingResponse:
    state = engine.derive(filter_text=filter, dedupe=True)
    return NextCrossingResponse.from_state(state)
