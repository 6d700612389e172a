"""FastAPI dependencies used across routers."""
from __future__ import annotations

from nyewave.config.settings import Settings, get_settings
from nyewave.core.engine import CountdownEngine
from nyewave.tasks.service import get_engine as _get_engine


def get_engine() -> CountdownEngine:
    return _get_engine()


def get_app_settings() -> Settings:
    return get_settings()
