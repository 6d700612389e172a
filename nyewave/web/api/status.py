"""Health and status endpoints."""
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from nyewave.core.engine import CountdownEngine
from nyewave.core.formatting import format_utc
from nyewave.tasks.scheduler import TICK_JOB_ID, scheduler
from nyewave.utils.wave_events import EVENT_ROLLOVER, get_wave_event_handler

from . import deps

router = APIRouter(tags=["status"])


@router.get("/health")
async def healthcheck(engine: CountdownEngine = Depends(deps.get_engine)) -> dict:
    now = datetime.now(timezone.utc)

    try:
        job = scheduler.scheduler.get_job(TICK_JOB_ID)
    except Exception:  # pragma: no cover - scheduler access failure
        job = None
    running = getattr(scheduler.scheduler, "running", False)

    status = "ok"
    status_details = []
    if not engine.crossings:
        status = "degraded"
        status_details.append("No timezone could be resolved")
    if running and job is None:
        status = "degraded"
        status_details.append("Tick job missing")

    latest = scheduler.latest
    return {
        "status": status,
        "status_details": status_details,
        "timestamp": now.isoformat(),
        "engine": {
            "target_year": engine.target_year,
            "catalog_size": len(engine.catalog),
            "resolved_zones": len(engine.crossings),
            "dropped_zones": engine.dropped_count,
            "first_crossing": format_utc(engine.crossings[0].instant) if engine.crossings else None,
            "last_crossing": format_utc(engine.crossings[-1].instant) if engine.crossings else None,
            "last_rollover": get_wave_event_handler().latest(EVENT_ROLLOVER),
        },
        "scheduler": {
            "running": running,
            "ticks": scheduler.tick_count,
            "next_run_time": job.next_run_time.isoformat() if job and job.next_run_time else None,
            "last_progress": (
                f"{latest.crossed_count} / {latest.total_count}" if latest is not None else None
            ),
        },
    }
