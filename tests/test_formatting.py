from nyewave.core.formatting import (
    COUNTDOWN_PASSED,
    format_countdown,
    format_group_detail,
    format_in_zone,
    format_offset,
    format_utc,
    heading,
    page_title,
    zone_city,
)


def test_format_offset():
    assert format_offset(0) == "UTC+00:00"
    assert format_offset(60) == "UTC+01:00"
    assert format_offset(345) == "UTC+05:45"
    assert format_offset(-210) == "UTC-03:30"
    assert format_offset(840) == "UTC+14:00"


def test_format_countdown_truncates_sub_seconds():
    assert format_countdown(1999) == "00:00:01"
    assert format_countdown(26 * 3_600_000 + 61_999) == "26:01:01"
    assert format_countdown(100 * 3_600_000) == "100:00:00"


def test_format_countdown_never_negative():
    assert format_countdown(0) == COUNTDOWN_PASSED
    assert format_countdown(-5000) == COUNTDOWN_PASSED


def test_format_instants():
    assert format_utc(0) == "1970-01-01 00:00:00 UTC"
    assert format_in_zone(0, "Europe/Berlin") == "1970-01-01 01:00:00 Berlin"
    assert format_in_zone(0, "America/New_York") == "1969-12-31 19:00:00 New York"
    assert zone_city("UTC") == "UTC"


def test_group_detail_preview():
    assert format_group_detail(["UTC"]) == ""
    assert format_group_detail(["UTC", "Europe/London"]) == "UTC, Europe/London"

    names = [f"Zone/{idx}" for idx in range(10)]
    detail = format_group_detail(names, limit=8)
    assert detail.endswith(", …")
    assert "Zone/7" in detail
    assert "Zone/8" not in detail
    assert format_group_detail(names[:8], limit=8) == ", ".join(names[:8])


def test_titles():
    assert page_title(2030) == "NYE 2030 – Timezone Wave"
    assert heading(2030) == "NYE 2030 – Midnight Wave by Timezone"
