"""geotargeting data models package.

All inputs and outputs of the engine are typed dataclasses defined here.
"""

from geotargeting.models.budget import (
    BudgetOptimization,
    BudgetSufficiency,
    BudgetSuggestion,
    ROISimulation,
)
from geotargeting.models.coverage import CoverageComparison, CoverageEstimate, DensityClass
from geotargeting.models.geocode import (
    AddressSuggestion,
    GeocodeResult,
    LookupStatus,
    ReverseGeocodeResult,
    StructuredAddress,
)
from geotargeting.models.plan import AddressPlan, TargetingPlan
from geotargeting.models.targeting import (
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
    polygon_from_pairs,
)

__all__ = [
    # targeting
    "Coordinate",
    "RadiusShape",
    "PolygonShape",
    "CityListShape",
    "StateListShape",
    "TargetingShape",
    "polygon_from_pairs",
    # coverage
    "DensityClass",
    "CoverageEstimate",
    "CoverageComparison",
    # budget
    "BudgetSuggestion",
    "ROISimulation",
    "BudgetSufficiency",
    "BudgetOptimization",
    # geocode
    "LookupStatus",
    "StructuredAddress",
    "GeocodeResult",
    "ReverseGeocodeResult",
    "AddressSuggestion",
    # plan
    "TargetingPlan",
    "AddressPlan",
]
