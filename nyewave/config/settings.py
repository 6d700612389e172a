"""Application configuration and environment management."""
from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from nyewave.core.formatting import GROUP_PREVIEW_LIMIT

load_dotenv()


def _is_valid_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def _detect_timezone() -> str:
    for env_name in ("REFERENCE_TIMEZONE", "TZ", "LOCAL_TIMEZONE"):
        candidate = os.environ.get(env_name)
        if candidate and _is_valid_zone(candidate):
            return candidate

    try:
        import tzlocal

        local_tz = str(tzlocal.get_localzone())
    except Exception:
        return "UTC"
    return local_tz if _is_valid_zone(local_tz) else "UTC"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    app_name: str = Field(default="NYE Timezone Wave", description="Human readable app name")
    environment: str = Field(default="development", description="Runtime environment name")

    reference_timezone: str = Field(
        default_factory=_detect_timezone,
        description="Zone every crossing is additionally shown in",
    )
    tick_seconds: float = Field(default=1.0, gt=0, description="Seconds between re-renders")
    group_preview_limit: int = Field(
        default=GROUP_PREVIEW_LIMIT,
        ge=1,
        description="Zone names listed in a grouped row before truncating",
    )
    default_dedupe: bool = Field(default=False, description="Group simultaneous zones by default")
    zone_catalog: List[str] = Field(
        default_factory=list,
        description="Explicit zone list; empty means every zone the host knows",
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("reference_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        if not _is_valid_zone(value):
            raise ValueError(f"Unknown timezone '{value}'")
        return value

    @field_validator("zone_catalog", mode="before")
    @classmethod
    def _split_zones(cls, value: str | List[str] | None) -> List[str]:
        if not value:
            return []
        if isinstance(value, str):
            value = value.replace("\n", ",").split(",")
        return [item.strip() for item in value if item and item.strip()]

    @field_validator("log_level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level


_ENV_MAPPING = {
    "APP_NAME": "app_name",
    "ENVIRONMENT": "environment",
    "REFERENCE_TIMEZONE": "reference_timezone",
    "TICK_SECONDS": "tick_seconds",
    "GROUP_PREVIEW_LIMIT": "group_preview_limit",
    "DEFAULT_DEDUPE": "default_dedupe",
    "ZONE_CATALOG": "zone_catalog",
    "LOG_LEVEL": "log_level",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name in os.environ:
            data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return _load_settings()
