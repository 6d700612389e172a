"""Metadata endpoints for UI configuration options."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from nyewave.config.settings import Settings
from nyewave.core.engine import CountdownEngine
from nyewave.core.formatting import heading, page_title

from . import deps

router = APIRouter(prefix="/api/meta", tags=["meta"])


@router.get("/options", response_model=dict)
async def get_options(
    engine: CountdownEngine = Depends(deps.get_engine),
    settings: Settings = Depends(deps.get_app_settings),
) -> dict:
    return {
        "app_name": settings.app_name,
        "title": page_title(engine.target_year),
        "heading": heading(engine.target_year),
        "target_year": engine.target_year,
        "reference_timezone": settings.reference_timezone,
        "tick_seconds": settings.tick_seconds,
        "default_dedupe": settings.default_dedupe,
        "group_preview_limit": engine.preview_limit,
        "catalog_size": len(engine.catalog),
    }
