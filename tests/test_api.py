import logging
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from nyewave.config.settings import Settings
from nyewave.core.engine import CountdownEngine
from nyewave.utils.logging import setup_logging
from nyewave.utils.time_utils import FixedClock
from nyewave.utils.wave_events import EVENT_NEXT_CROSSING, EVENT_ROLLOVER, event_extra, get_wave_event_handler
from nyewave.web.api import deps
from nyewave.web.main import app


@pytest.fixture
def client():
    clock = FixedClock(datetime(2029, 12, 31, 22, 30, tzinfo=timezone.utc))
    engine = CountdownEngine(["UTC", "Europe/Berlin", "Europe/London"], clock)
    settings = Settings(reference_timezone="Europe/Berlin", default_dedupe=False)
    app.dependency_overrides[deps.get_engine] = lambda: engine
    app.dependency_overrides[deps.get_app_settings] = lambda: settings
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_wave_lists_every_zone(client):
    resp = client.get("/api/wave")
    assert resp.status_code == 200
    body = resp.json()

    assert body["target_year"] == 2030
    assert body["title"] == "NYE 2030 – Timezone Wave"
    assert body["empty"] is False
    assert [row["label"] for row in body["rows"]] == ["Europe/Berlin", "UTC", "Europe/London"]
    first = body["rows"][0]
    assert first["status"] == "next"
    assert first["countdown"] == "00:30:00"
    assert first["offset"] == "UTC+01:00"
    assert first["utc"] == "2029-12-31 23:00:00 UTC"
    assert first["reference_local"] == "2030-01-01 00:00:00 Berlin"
    assert body["next_index"] == 0
    assert body["next_key"] == first["key"]
    assert body["progress"].startswith("0 / 3 crossed into 2030. Next in 00:30:00")
    assert body["info"].startswith("Showing 3 timezones out of 3.")


def test_wave_dedupe_groups_rows(client):
    body = client.get("/api/wave", params={"dedupe": "true"}).json()

    assert [row["label"] for row in body["rows"]] == ["Europe/Berlin", "2 zones"]
    assert body["rows"][1]["detail"] == "UTC, Europe/London"
    assert body["rows"][1]["zones"] == ["UTC", "Europe/London"]
    assert body["dedupe"] is True


def test_wave_filter_without_matches_is_empty(client):
    body = client.get("/api/wave", params={"filter": "atlantis"}).json()

    assert body["empty"] is True
    assert body["rows"] == []
    assert body["next_index"] is None
    assert body["total_count"] == 0


def test_wave_rejects_oversized_filter(client):
    resp = client.get("/api/wave", params={"filter": "x" * 101})
    assert resp.status_code == 422


def test_next_crossing(client):
    body = client.get("/api/wave/next").json()
    assert body["pending"] is True
    assert body["label"] == "Europe/Berlin"
    assert body["countdown"] == "00:30:00"
    assert body["next_in"] == 30 * 60 * 1000


def test_next_crossing_for_empty_filter(client):
    body = client.get("/api/wave/next", params={"filter": "atlantis"}).json()
    assert body["pending"] is False
    assert body["label"] is None
    assert body["countdown"] == "passed"
    assert body["next_in"] == 0


def test_meta_options(client):
    body = client.get("/api/meta/options").json()
    assert body["target_year"] == 2030
    assert body["reference_timezone"] == "Europe/Berlin"
    assert body["group_preview_limit"] == 8
    assert body["catalog_size"] == 3


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["engine"]["resolved_zones"] == 3
    assert body["engine"]["dropped_zones"] == 0
    assert body["engine"]["first_crossing"] == "2029-12-31 23:00:00 UTC"


def test_events_endpoint(client):
    setup_logging()
    handler = get_wave_event_handler()
    handler.clear()
    logger = logging.getLogger("nyewave.test.api")
    logger.warning("Rolled over", extra=event_extra(EVENT_ROLLOVER, 2031))
    logger.warning("Next", extra=event_extra(EVENT_NEXT_CROSSING, 2031, "Europe/Berlin", 1))

    body = client.get("/api/events", params={"event": "rollover", "limit": 5}).json()
    assert body["count"] == 1
    assert body["entries"][0]["target_year"] == 2031
    assert client.get("/health").json()["engine"]["last_rollover"]["target_year"] == 2031
    assert client.get("/api/events", params={"event": "bogus"}).status_code == 422
    assert client.delete("/api/events").json() == {"cleared": True}
    assert handler.size() == 0
