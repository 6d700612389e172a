"""APScheduler wrapper driving the once-per-tick re-derivation."""
from __future__ import annotations

import logging
from typing import Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from nyewave.config.settings import get_settings
from nyewave.core.engine import CountdownEngine
from nyewave.core.view import ViewState
from nyewave.tasks.service import get_engine

logger = logging.getLogger("nyewave.scheduler")

TICK_JOB_ID = "wave-tick"


class SchedulerManager:
    def __init__(self, engine_factory: Callable[[], CountdownEngine] = get_engine) -> None:
        self.scheduler = AsyncIOScheduler(timezone="UTC")
        self._engine_factory = engine_factory
        self._started = False
        self.latest: ViewState | None = None
        self.tick_count = 0

    async def start(self) -> None:
        settings = get_settings()
        if not self._started:
            self.scheduler.start()
            self._started = True
            logger.info("Scheduler started")
        self.scheduler.add_job(
            self.tick,
            trigger=IntervalTrigger(seconds=settings.tick_seconds),
            id=TICK_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        logger.info("Ticking every %ss", settings.tick_seconds)

    async def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            self._started = False
            logger.info("Scheduler stopped")

    async def tick(self) -> ViewState | None:
        try:
            engine = self._engine_factory()
            state = engine.derive(dedupe=get_settings().default_dedupe)
            engine.track_next(state)
        except Exception:
            logger.exception("Tick failed")
            return None
        self.latest = state
        self.tick_count += 1
        return state


scheduler = SchedulerManager()
