"""geotargeting — Geospatial targeting and coverage estimation engine.

Public API surface:
    - TargetingConfig: Runtime configuration
    - CoveragePlanner: Validated end-to-end coverage and budget planning
    - GeocodeGateway: Caching address lookup adapter
    - estimate_coverage / point_in_shape / suggest_budget / simulate_roi /
      is_budget_sufficient / optimize_budget: core computations
"""

__version__ = "1.0.0"
__author__ = "geotargeting Contributors"

from config.settings import TargetingConfig
from geotargeting.analysis import (
    estimate_coverage,
    is_budget_sufficient,
    optimize_budget,
    point_in_shape,
    simulate_roi,
    suggest_budget,
)
from geotargeting.geocode_gateway import GeocodeGateway
from geotargeting.planner import CoveragePlanner

__all__ = [
    "__version__",
    "TargetingConfig",
    "CoveragePlanner",
    "GeocodeGateway",
    "estimate_coverage",
    "point_in_shape",
    "suggest_budget",
    "simulate_roi",
    "is_budget_sufficient",
    "optimize_budget",
]
