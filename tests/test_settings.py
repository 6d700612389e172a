import pytest
from pydantic import ValidationError

from nyewave.config import settings as settings_module
from nyewave.config.settings import Settings, _load_settings
from nyewave.config.timezones import ZoneCatalog, load_zone_catalog


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in settings_module._ENV_MAPPING:
        monkeypatch.delenv(name, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("REFERENCE_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("ZONE_CATALOG", "UTC, Europe/Berlin\nAsia/Tokyo,")
    monkeypatch.setenv("GROUP_PREVIEW_LIMIT", "3")
    monkeypatch.setenv("DEFAULT_DEDUPE", "true")
    monkeypatch.setenv("TICK_SECONDS", "0.5")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = _load_settings()

    assert settings.reference_timezone == "Asia/Tokyo"
    assert settings.zone_catalog == ["UTC", "Europe/Berlin", "Asia/Tokyo"]
    assert settings.group_preview_limit == 3
    assert settings.default_dedupe is True
    assert settings.tick_seconds == 0.5
    assert settings.log_level == "DEBUG"


def test_defaults():
    settings = Settings(reference_timezone="Europe/Berlin")
    assert settings.group_preview_limit == 8
    assert settings.tick_seconds == 1.0
    assert settings.default_dedupe is False
    assert settings.zone_catalog == []


@pytest.mark.parametrize(
    "env_name, value",
    [
        ("REFERENCE_TIMEZONE", "Mars/Olympus_Mons"),
        ("TICK_SECONDS", "0"),
        ("GROUP_PREVIEW_LIMIT", "0"),
        ("LOG_LEVEL", "loud"),
    ],
)
def test_invalid_values_rejected(monkeypatch, env_name, value):
    monkeypatch.setenv(env_name, value)
    with pytest.raises(ValidationError):
        _load_settings()


def test_get_settings_is_cached():
    assert settings_module.get_settings() is settings_module.get_settings()


def test_catalog_override_and_host():
    catalog = load_zone_catalog(["UTC", " Europe/Berlin ", "UTC", ""])
    assert catalog.zones == ("UTC", "Europe/Berlin")

    host = load_zone_catalog([])
    assert isinstance(host, ZoneCatalog)
    assert "Europe/Berlin" in host.zones
    assert list(host.zones) == sorted(host.zones)
