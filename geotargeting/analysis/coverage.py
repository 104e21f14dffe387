"""Coverage estimation for geotargeting.

Composes the area and density engines into reach, impressions and CPM.
Intermediate values stay unrounded; rounding to presentation precision
happens once, on the returned CoverageEstimate.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from config.defaults import AREA_DECIMALS, CPM_DECIMALS, IMPRESSIONS_PER_PERSON
from geotargeting.analysis.area import shape_area_km2
from geotargeting.analysis.density import density_value, estimate_density
from geotargeting.models.coverage import CoverageComparison, CoverageEstimate
from geotargeting.models.targeting import Coordinate, TargetingShape

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def compute_cpm(budget: Optional[float], impressions: int) -> float:
    """Cost per thousand impressions; 0.0 unless budget and impressions are positive."""
    if not budget or budget <= 0 or impressions <= 0:
        return 0.0
    return budget / impressions * 1000.0


def estimate_coverage(
    shape: TargetingShape,
    resolved_center: Optional[Coordinate] = None,
    budget: Optional[float] = None,
) -> CoverageEstimate:
    """Estimate area, reach, impressions and CPM for a targeting shape.

    A shape with zero area yields an all-zero estimate rather than an error.

    Args:
        shape: Targeting shape (validated by the caller).
        resolved_center: Centre used by the density heuristic, if known.
        budget: Campaign budget used for the CPM figure.

    Returns:
        CoverageEstimate with area and CPM rounded to 2 decimals.
    """
    area = shape_area_km2(shape)
    if area == 0:
        logger.debug("Coverage estimate: zero-area %s — returning empty estimate",
                     type(shape).__name__)
        return CoverageEstimate()

    density_class = estimate_density(shape, resolved_center)
    density = density_value(density_class)

    reach = round_half_up(area * density)
    impressions = reach * IMPRESSIONS_PER_PERSON
    cpm = compute_cpm(budget, impressions)

    return CoverageEstimate(
        area_km2=round(area, AREA_DECIMALS),
        estimated_reach=reach,
        estimated_impressions=impressions,
        estimated_cpm=round(cpm, CPM_DECIMALS),
        density_people_per_km2=density,
        density_class=density_class,
    )


def compare_coverage(first: CoverageEstimate, second: CoverageEstimate) -> CoverageComparison:
    """Differences between two estimates, each computed as second minus first."""
    return CoverageComparison(
        area_diff_km2=round(second.area_km2 - first.area_km2, AREA_DECIMALS),
        reach_diff=second.estimated_reach - first.estimated_reach,
        impressions_diff=second.estimated_impressions - first.estimated_impressions,
        cpm_diff=round(second.estimated_cpm - first.estimated_cpm, CPM_DECIMALS),
    )
