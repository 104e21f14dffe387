"""geotargeting configuration package."""

from config.defaults import (
    CITY_AREA_KM2,
    DEFAULT_LOG_LEVEL,
    EARTH_RADIUS_KM,
    IMPRESSIONS_PER_PERSON,
    KM_PER_DEGREE,
    NOMINATIM_BASE_URL,
    STATE_AREA_KM2,
)
from config.settings import TargetingConfig

__all__ = [
    "TargetingConfig",
    "EARTH_RADIUS_KM",
    "KM_PER_DEGREE",
    "CITY_AREA_KM2",
    "STATE_AREA_KM2",
    "IMPRESSIONS_PER_PERSON",
    "NOMINATIM_BASE_URL",
    "DEFAULT_LOG_LEVEL",
]
