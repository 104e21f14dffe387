"""geotargeting — TargetingConfig and environment-based configuration loading.

Runtime configuration for the geocoding gateway and planner flows through
TargetingConfig. Network endpoints and cache sizing may be overridden from
environment variables; numeric model constants come from config.defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from config.defaults import (
    AUTOCOMPLETE_DEFAULT_LIMIT,
    AUTOCOMPLETE_MIN_CHARS,
    DEFAULT_CONVERSION_VALUE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TARGET_ROI_PERCENT,
    GEOCODE_BACKOFF_BASE,
    GEOCODE_CACHE_CAPACITY,
    GEOCODE_CACHE_TTL_SECONDS,
    GEOCODE_COUNTRY_CODES,
    GEOCODE_LANGUAGE,
    GEOCODE_MAX_RETRIES,
    GEOCODE_REQUEST_TIMEOUT,
    NOMINATIM_BASE_URL,
    NOMINATIM_MIN_INTERVAL_SECONDS,
    NOMINATIM_USER_AGENT,
)

# Load .env file if present; silently skip if missing
load_dotenv()


def _env_optional_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_optional_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


@dataclass
class TargetingConfig:
    """Single configuration object shared by the geocode gateway and planner.

    Pure geometry and estimation functions take their constants from
    config.defaults directly; this object carries what varies per deployment.
    """

    # ── Geocoding provider ─────────────────────────────────────────────────────
    nominatim_base_url: str = field(
        default_factory=lambda: os.getenv("NOMINATIM_BASE_URL", NOMINATIM_BASE_URL)
    )
    user_agent: str = field(
        default_factory=lambda: os.getenv("NOMINATIM_USER_AGENT", NOMINATIM_USER_AGENT)
    )
    country_codes: str = field(
        default_factory=lambda: os.getenv("GEOCODE_COUNTRY_CODES", GEOCODE_COUNTRY_CODES)
    )
    language: str = field(default_factory=lambda: os.getenv("GEOCODE_LANGUAGE", GEOCODE_LANGUAGE))
    min_interval_seconds: float = NOMINATIM_MIN_INTERVAL_SECONDS
    max_retries: int = GEOCODE_MAX_RETRIES
    backoff_base: float = GEOCODE_BACKOFF_BASE
    request_timeout: float = GEOCODE_REQUEST_TIMEOUT

    # ── Autocomplete ───────────────────────────────────────────────────────────
    autocomplete_min_chars: int = AUTOCOMPLETE_MIN_CHARS
    autocomplete_limit: int = AUTOCOMPLETE_DEFAULT_LIMIT

    # ── Geocode cache (None = unbounded / no expiry) ───────────────────────────
    cache_capacity: Optional[int] = field(
        default_factory=lambda: _env_optional_int("GEOCODE_CACHE_CAPACITY", GEOCODE_CACHE_CAPACITY)
    )
    cache_ttl_seconds: Optional[float] = field(
        default_factory=lambda: _env_optional_float(
            "GEOCODE_CACHE_TTL_SECONDS", GEOCODE_CACHE_TTL_SECONDS
        )
    )

    # ── Budget planning ────────────────────────────────────────────────────────
    target_roi_percent: float = DEFAULT_TARGET_ROI_PERCENT
    avg_conversion_value: float = DEFAULT_CONVERSION_VALUE

    # ── Logging ────────────────────────────────────────────────────────────────
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL))

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.min_interval_seconds < 0:
            raise ValueError(
                f"min_interval_seconds must be >= 0, got {self.min_interval_seconds}"
            )
        if self.cache_capacity is not None and self.cache_capacity <= 0:
            raise ValueError(f"cache_capacity must be positive or None, got {self.cache_capacity}")
        if self.cache_ttl_seconds is not None and self.cache_ttl_seconds <= 0:
            raise ValueError(
                f"cache_ttl_seconds must be positive or None, got {self.cache_ttl_seconds}"
            )
