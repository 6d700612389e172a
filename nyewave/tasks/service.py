"""Process-wide countdown engine built from settings."""
from __future__ import annotations

import logging
from functools import lru_cache

from nyewave.config.settings import Settings, get_settings
from nyewave.config.timezones import load_zone_catalog
from nyewave.core.engine import CountdownEngine, TimeSource

logger = logging.getLogger("nyewave.service")


def build_engine(settings: Settings, clock: TimeSource | None = None) -> CountdownEngine:
    catalog = load_zone_catalog(settings.zone_catalog)
    logger.info("Loaded %s zones (%s)", len(catalog), "configured" if settings.zone_catalog else "host")
    return CountdownEngine(catalog, clock, preview_limit=settings.group_preview_limit)


@lru_cache(maxsize=1)
def get_engine() -> CountdownEngine:
    return build_engine(get_settings())
