"""geotargeting — All default threshold values and configuration constants.

All tuneable values live here. Never hard-code magic numbers in source files.
Import constants from this module; override via TargetingConfig at runtime.
"""

from typing import Dict, Optional

# ── Geometry ───────────────────────────────────────────────────────────────────
# Mean Earth radius used by the Haversine formula (km)
EARTH_RADIUS_KM: float = 6371.0

# Planar degree-to-km factor for shoelace areas (1° latitude ≈ 111 km;
# longitude uses the same mean value)
KM_PER_DEGREE: float = 111.0

# Coarse stand-in area per targeted city (km²)
CITY_AREA_KM2: float = 500.0

# Coarse stand-in area per targeted state (km²)
STATE_AREA_KM2: float = 200_000.0

# ── Population density ─────────────────────────────────────────────────────────
# People per km² for each density class
DENSITY_METROPOLITAN: int = 10_000
DENSITY_URBAN: int = 5_000
DENSITY_SUBURBAN: int = 2_000
DENSITY_RURAL: int = 100

# Distance from a known metro centre under which an area is Metropolitan (km)
METRO_RADIUS_KM: float = 50.0

# Distance from a known metro centre under which an area is Urban (km)
URBAN_RADIUS_KM: float = 100.0

# ── Coverage ───────────────────────────────────────────────────────────────────
# Average impressions delivered per reached person over a campaign
IMPRESSIONS_PER_PERSON: int = 3

# Presentation precision for area and CPM values
AREA_DECIMALS: int = 2
CPM_DECIMALS: int = 2

# ── Budget advisor ─────────────────────────────────────────────────────────────
# Cost per km² per day for each objective class (BRL)
COST_PER_KM2_PER_DAY: Dict[str, float] = {
    "awareness": 50.0,
    "traffic": 75.0,
    "conversions": 100.0,
    "engagement": 60.0,
    "retention": 60.0,
}

# Conversion rate per objective class
CONVERSION_RATES: Dict[str, float] = {
    "awareness": 0.01,
    "traffic": 0.02,
    "conversions": 0.05,
    "engagement": 0.03,
    "retention": 0.03,
}

# Alternative spellings accepted for objective classes
OBJECTIVE_ALIASES: Dict[str, str] = {
    "consideration": "traffic",
    "conversion": "conversions",
}

# Objective class used when an unknown objective is supplied to suggest_budget
DEFAULT_OBJECTIVE: str = "traffic"

# Conversion rate used when the objective is unknown and no override is given
DEFAULT_CONVERSION_RATE: float = 0.02

# Average revenue per conversion (BRL)
DEFAULT_CONVERSION_VALUE: float = 50.0

# Absolute floor for the minimum suggested budget (BRL)
MIN_BUDGET_FLOOR: float = 100.0

# Multipliers applied to the base cost for minimum / optimized suggestions
MIN_BUDGET_FACTOR: float = 0.5
OPTIMIZED_BUDGET_FACTOR: float = 1.5

# Default ROI target (percent) for optimize_budget
DEFAULT_TARGET_ROI_PERCENT: float = 100.0

# Fractional reduction applied on each optimizer step
OPTIMIZER_STEP_FACTOR: float = 0.9

# Maximum optimizer reduction steps
OPTIMIZER_MAX_ITERATIONS: int = 10

# People per km² assumed when the optimizer simulates reach
OPTIMIZER_ASSUMED_DENSITY: int = 5_000

# Currency prefix for human-readable budget messages
CURRENCY_SYMBOL: str = "R$"

# ── Geocoding (Nominatim) ──────────────────────────────────────────────────────
NOMINATIM_BASE_URL: str = "https://nominatim.openstreetmap.org"

# Nominatim rejects requests without an identifying User-Agent
NOMINATIM_USER_AGENT: str = "geotargeting/1.0"

# Nominatim usage policy: at most one request per second
NOMINATIM_MIN_INTERVAL_SECONDS: float = 1.0

# Maximum retry attempts on transient HTTP failures
GEOCODE_MAX_RETRIES: int = 3

# Base seconds for exponential backoff
GEOCODE_BACKOFF_BASE: float = 1.0

# Default per-request timeout (seconds); callers may pass a tighter bound
GEOCODE_REQUEST_TIMEOUT: float = 10.0

# Restrict search/autocomplete results to these ISO country codes
GEOCODE_COUNTRY_CODES: str = "br"

# Response language for display names
GEOCODE_LANGUAGE: str = "pt-BR"

# Autocomplete inputs shorter than this return no suggestions
AUTOCOMPLETE_MIN_CHARS: int = 3

# Default number of autocomplete suggestions
AUTOCOMPLETE_DEFAULT_LIMIT: int = 5

# Decimal places used for reverse-geocode cache keys
REVERSE_KEY_PRECISION: int = 6

# ── Geocode cache ──────────────────────────────────────────────────────────────
# None means unbounded / never expires
GEOCODE_CACHE_CAPACITY: Optional[int] = None
GEOCODE_CACHE_TTL_SECONDS: Optional[float] = None

# ── Logging ────────────────────────────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
