"""Text formatting for offsets, instants and countdowns."""
from __future__ import annotations

from typing import Sequence
from zoneinfo import ZoneInfo

from nyewave.utils.time_utils import from_millis

COUNTDOWN_PASSED = "passed"
GROUP_PREVIEW_LIMIT = 8
PREVIEW_SEPARATOR = ", "
ELLIPSIS = "…"

_STAMP = "%Y-%m-%d %H:%M:%S"


def format_offset(minutes: int) -> str:
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"UTC{sign}{hours:02d}:{mins:02d}"


def format_countdown(ms: int) -> str:
    """Format a remaining duration as ``hh:mm:ss``, dropping sub-second remainder.

    Non-positive durations produce :data:`COUNTDOWN_PASSED`; hours are not capped.
    """
    if ms <= 0:
        return COUNTDOWN_PASSED
    hours, rest = divmod(ms // 1000, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_utc(ms: int) -> str:
    return from_millis(ms).strftime(_STAMP) + " UTC"


def zone_city(zone: str) -> str:
    """Short display name for a zone: ``Europe/Berlin`` -> ``Berlin``."""
    return zone.rsplit("/", 1)[-1].replace("_", " ")


def format_in_zone(ms: int, zone: str) -> str:
    local = from_millis(ms).astimezone(ZoneInfo(zone))
    return f"{local.strftime(_STAMP)} {zone_city(zone)}"


def format_group_detail(zones: Sequence[str], limit: int = GROUP_PREVIEW_LIMIT) -> str:
    """Preview of grouped zone names; empty for single-zone groups."""
    if len(zones) <= 1:
        return ""
    preview = PREVIEW_SEPARATOR.join(zones[:limit])
    if len(zones) > limit:
        preview += PREVIEW_SEPARATOR + ELLIPSIS
    return preview


def page_title(year: int) -> str:
    return f"NYE {year} – Timezone Wave"


def heading(year: int) -> str:
    return f"NYE {year} – Midnight Wave by Timezone"
