# orbitscene/config.py
"""
Tracker configuration.

All the numbers the tracker used to carry as literals (tracked-object limit,
two-digit-year pivot, body radius, rotation period) live here as named,
overridable fields. Values can be set directly, from the Streamlit sidebar,
from the command line, or from ORBITSCENE_* environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

CELESTRAK_GP_URL = "https://celestrak.org/NORAD/elements/gp.php"

EARTH_RADIUS_KM = 6371.0
SIDEREAL_DAY_S = 86164.0
DEFAULT_MAX_TRACKED = 50
DEFAULT_CENTURY_PIVOT = 57


@dataclass(frozen=True)
class TrackerConfig:
    catalog_url: str = CELESTRAK_GP_URL
    group: str = "starlink"
    format: str = "tle"
    max_tracked: int = DEFAULT_MAX_TRACKED
    century_pivot: int = DEFAULT_CENTURY_PIVOT
    body_radius_km: float = EARTH_RADIUS_KM
    sidereal_day_s: float = SIDEREAL_DAY_S
    request_timeout_s: float = 30.0
    refresh_interval_s: float = 1.0
    cache_ttl_s: int = 7200
    earth_texture: Optional[str] = None
    star_count: int = 1500

    def __post_init__(self):
        if self.max_tracked < 0:
            raise ValueError(f"max_tracked must be >= 0, got {self.max_tracked}")
        if self.body_radius_km <= 0:
            raise ValueError(f"body_radius_km must be > 0, got {self.body_radius_km}")
        if self.sidereal_day_s <= 0:
            raise ValueError(f"sidereal_day_s must be > 0, got {self.sidereal_day_s}")
        if self.refresh_interval_s <= 0:
            raise ValueError(f"refresh_interval_s must be > 0, got {self.refresh_interval_s}")

    def catalog_query_url(self) -> str:
        return f"{self.catalog_url}?GROUP={self.group}&FORMAT={self.format}"

    def with_overrides(self, **changes) -> "TrackerConfig":
        """Return a copy with the non-None ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        defaults = cls()
        return cls(
            catalog_url=os.getenv("ORBITSCENE_CATALOG_URL", defaults.catalog_url),
            group=os.getenv("ORBITSCENE_GROUP", defaults.group),
            format=os.getenv("ORBITSCENE_FORMAT", defaults.format),
            max_tracked=int(os.getenv("ORBITSCENE_MAX_TRACKED", str(defaults.max_tracked))),
            century_pivot=int(os.getenv("ORBITSCENE_CENTURY_PIVOT", str(defaults.century_pivot))),
            body_radius_km=float(os.getenv("ORBITSCENE_BODY_RADIUS_KM", str(defaults.body_radius_km))),
            sidereal_day_s=float(os.getenv("ORBITSCENE_SIDEREAL_DAY_S", str(defaults.sidereal_day_s))),
            request_timeout_s=float(os.getenv("ORBITSCENE_REQUEST_TIMEOUT_S", str(defaults.request_timeout_s))),
            refresh_interval_s=float(os.getenv("ORBITSCENE_REFRESH_S", str(defaults.refresh_interval_s))),
            cache_ttl_s=int(os.getenv("ORBITSCENE_CACHE_TTL_S", str(defaults.cache_ttl_s))),
            earth_texture=os.getenv("ORBITSCENE_EARTH_TEXTURE") or None,
            star_count=int(os.getenv("ORBITSCENE_STAR_COUNT", str(defaults.star_count))),
        )
