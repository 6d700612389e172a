"""Timezone catalog enumerated from the host timezone database."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from zoneinfo import available_timezones


@dataclass(frozen=True)
class ZoneCatalog:
    """Ordered, immutable set of zone identifiers.

    Enumeration order matters: zones sharing a crossing instant keep this order
    inside their group, so the order is part of the catalog rather than implied.
    """

    zones: tuple[str, ...]

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ZoneCatalog":
        cleaned = (name.strip() for name in names)
        return cls(zones=tuple(dict.fromkeys(name for name in cleaned if name)))

    @classmethod
    def from_host(cls) -> "ZoneCatalog":
        return cls.from_names(sorted(available_timezones()))

    def __len__(self) -> int:
        return len(self.zones)

    def __iter__(self):
        return iter(self.zones)


def load_zone_catalog(override: list[str] | None = None) -> ZoneCatalog:
    """Return the configured catalog, falling back to every zone the host knows."""
    if override:
        return ZoneCatalog.from_names(override)
    return ZoneCatalog.from_host()
