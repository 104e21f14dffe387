"""Coverage estimation data models for geotargeting.

Defines the density classes and the derived coverage records returned by
analysis.coverage. All records are transient and recomputed per call.
"""

from __future__ import annotations

from dataclasses import dataclass


class DensityClass:
    """Population density buckets used for reach estimation."""

    METROPOLITAN = "metropolitan"
    URBAN = "urban"
    SUBURBAN = "suburban"
    RURAL = "rural"

    ALL = (METROPOLITAN, URBAN, SUBURBAN, RURAL)


@dataclass
class CoverageEstimate:
    """Estimated advertising footprint of a targeting configuration."""

    area_km2: float = 0.0               # Rounded to 2 decimals
    estimated_reach: int = 0
    estimated_impressions: int = 0
    estimated_cpm: float = 0.0          # Rounded to 2 decimals; 0 when not computable
    density_people_per_km2: int = 0
    density_class: str = ""             # Empty for the degenerate zero-area estimate


@dataclass
class CoverageComparison:
    """Field-wise difference between two coverage estimates (second minus first)."""

    area_diff_km2: float = 0.0
    reach_diff: int = 0
    impressions_diff: int = 0
    cpm_diff: float = 0.0
