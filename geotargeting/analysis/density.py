"""Population density heuristic for geotargeting.

Deterministic and total: estimate_density never raises and always returns a
DensityClass. Rule order:

  1. City list with at least one entry       → Urban
  2. Centre within 50 km of a metro centre    → Metropolitan
     Centre within 100 km of a metro centre   → Urban
     Any other centre                         → Suburban
  3. No centre and no cities                  → Urban

The Rural class is never produced by these rules; its density constant
exists for callers that classify areas themselves.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from config.defaults import (
    DENSITY_METROPOLITAN,
    DENSITY_RURAL,
    DENSITY_SUBURBAN,
    DENSITY_URBAN,
    METRO_RADIUS_KM,
    URBAN_RADIUS_KM,
)
from geotargeting.models.coverage import DensityClass
from geotargeting.models.targeting import CityListShape, Coordinate, TargetingShape
from geotargeting.utils.geo_utils import distance_km
from geotargeting.utils.regions import METRO_CENTERS

logger = logging.getLogger(__name__)

DENSITY_PEOPLE_PER_KM2: Dict[str, int] = {
    DensityClass.METROPOLITAN: DENSITY_METROPOLITAN,
    DensityClass.URBAN: DENSITY_URBAN,
    DensityClass.SUBURBAN: DENSITY_SUBURBAN,
    DensityClass.RURAL: DENSITY_RURAL,
}


def density_value(density_class: str) -> int:
    """People per km² for a density class."""
    return DENSITY_PEOPLE_PER_KM2[density_class]


def nearest_metro_distance_km(center: Coordinate) -> float:
    """Distance from center to the closest known metropolitan centre."""
    return min(distance_km(center, metro) for _, metro in METRO_CENTERS)


def estimate_density(
    shape: TargetingShape,
    resolved_center: Optional[Coordinate] = None,
) -> str:
    """Classify the population density of a targeting area.

    Args:
        shape: Targeting shape.
        resolved_center: Centre of the area if known (radius centre, geocoded
            address, or polygon centroid supplied by the caller).

    Returns:
        One of DensityClass.METROPOLITAN / URBAN / SUBURBAN.
    """
    if isinstance(shape, CityListShape) and len(shape.cities) > 0:
        return DensityClass.URBAN

    if resolved_center is not None:
        nearest = nearest_metro_distance_km(resolved_center)
        if nearest < METRO_RADIUS_KM:
            return DensityClass.METROPOLITAN
        if nearest < URBAN_RADIUS_KM:
            return DensityClass.URBAN
        logger.debug("Centre is %.1f km from the nearest metro centre: suburban", nearest)
        return DensityClass.SUBURBAN

    return DensityClass.URBAN
