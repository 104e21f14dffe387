"""geotargeting analysis package.

Pure, synchronous computations: containment, area, density, coverage and
budget advice. Only list-based containment touches the geocode gateway.
"""

from geotargeting.analysis.area import circle_area_km2, polygon_area_km2, shape_area_km2
from geotargeting.analysis.budget_advisor import (
    is_budget_sufficient,
    optimize_budget,
    simulate_roi,
    suggest_budget,
)
from geotargeting.analysis.containment import (
    point_in_polygon,
    point_in_radius,
    point_in_shape,
    points_in_shape,
)
from geotargeting.analysis.coverage import compare_coverage, estimate_coverage
from geotargeting.analysis.density import estimate_density

__all__ = [
    "circle_area_km2",
    "polygon_area_km2",
    "shape_area_km2",
    "point_in_radius",
    "point_in_polygon",
    "point_in_shape",
    "points_in_shape",
    "estimate_density",
    "estimate_coverage",
    "compare_coverage",
    "suggest_budget",
    "simulate_roi",
    "is_budget_sufficient",
    "optimize_budget",
]
