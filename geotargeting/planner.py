"""geotargeting coverage planner.

Composes the engine for the surrounding application: validates input at the
boundary, resolves addresses through the geocode gateway, and runs the
coverage and budget calculations in order.

Usage:
    from config.settings import TargetingConfig
    from geotargeting.planner import CoveragePlanner

    planner = CoveragePlanner(TargetingConfig())
    result = planner.plan_for_address("Av. Paulista, 1000, São Paulo", radius_km=5,
                                      budget=5000, objective="awareness", duration_days=30)
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from config.settings import TargetingConfig
from geotargeting.analysis.area import shape_area_km2
from geotargeting.analysis.budget_advisor import (
    is_budget_sufficient,
    simulate_roi,
    suggest_budget,
)
from geotargeting.analysis.containment import point_in_shape
from geotargeting.analysis.coverage import estimate_coverage
from geotargeting.geocode_gateway import GeocodeGateway
from geotargeting.models.plan import AddressPlan, TargetingPlan
from geotargeting.models.targeting import Coordinate, RadiusShape, TargetingShape
from geotargeting.utils.logging_utils import RequestContextAdapter, get_request_logger
from geotargeting.utils.validation import validate_coordinate, validate_shape

logger = logging.getLogger(__name__)


class CoveragePlanner:
    """Entry point tying geocoding, coverage estimation and budget advice together.

    Args:
        config: Runtime configuration; defaults to TargetingConfig().
        gateway: Geocode gateway; built from config when omitted.
    """

    def __init__(
        self,
        config: Optional[TargetingConfig] = None,
        gateway: Optional[GeocodeGateway] = None,
    ) -> None:
        self.config = config or TargetingConfig()
        self.gateway = gateway or GeocodeGateway.from_config(self.config)

    def _logger(self, request_id: Optional[str]) -> Union[logging.Logger, RequestContextAdapter]:
        return get_request_logger(__name__, request_id) if request_id else logger

    def plan(
        self,
        shape: TargetingShape,
        center: Optional[Coordinate] = None,
        budget: Optional[float] = None,
        objective: str = "traffic",
        duration_days: int = 30,
        request_id: Optional[str] = None,
    ) -> TargetingPlan:
        """Estimate coverage and budget figures for a targeting shape.

        Args:
            shape: Targeting shape.
            center: Centre for the density heuristic. Radius shapes default to
                their own centre.
            budget: Advertiser budget; enables CPM, sufficiency and ROI figures.
            objective: Campaign objective class.
            duration_days: Campaign length in days.
            request_id: Optional identifier prefixed to log messages.

        Returns:
            TargetingPlan.

        Raises:
            InvalidShapeError / InvalidCoordinateError: on invalid input.
        """
        log = self._logger(request_id)
        validate_shape(shape)
        if center is not None:
            validate_coordinate(center)
        elif isinstance(shape, RadiusShape):
            center = shape.center
        if duration_days <= 0:
            raise ValueError(f"duration_days must be positive, got {duration_days}")

        coverage = estimate_coverage(shape, center, budget)
        area = shape_area_km2(shape)
        suggestion = suggest_budget(area, objective, duration_days)
        plan = TargetingPlan(
            shape=shape,
            coverage=coverage,
            budget_suggestion=suggestion,
            objective=objective,
            duration_days=duration_days,
            center=center,
        )

        if budget is not None and budget > 0:
            plan.sufficiency = is_budget_sufficient(budget, area, duration_days, objective)
            if not plan.sufficiency.sufficient:
                plan.warnings.append(plan.sufficiency.message)
            if coverage.estimated_reach > 0:
                plan.roi = simulate_roi(
                    budget,
                    coverage.estimated_reach,
                    objective,
                    avg_conversion_value=self.config.avg_conversion_value,
                )

        log.info(
            "Plan: %s area=%.2f km² reach=%d cpm=%.2f",
            type(shape).__name__,
            coverage.area_km2,
            coverage.estimated_reach,
            coverage.estimated_cpm,
        )
        return plan

    def plan_for_address(
        self,
        address: str,
        radius_km: float,
        budget: Optional[float] = None,
        objective: str = "traffic",
        duration_days: int = 30,
        timeout: Optional[float] = None,
        request_id: Optional[str] = None,
    ) -> AddressPlan:
        """Geocode an address and plan a radius campaign around it.

        A failed lookup is returned as AddressPlan(lookup=..., plan=None)
        carrying the NOT_FOUND or UNAVAILABLE status.
        """
        log = self._logger(request_id)
        lookup = self.gateway.forward_geocode(address, timeout=timeout)
        if not lookup.found:
            log.warning("Address lookup for %.80r returned %s", address, lookup.status)
            return AddressPlan(lookup=lookup)

        shape = RadiusShape(center=lookup.coordinate, radius_km=radius_km)
        plan = self.plan(
            shape,
            center=lookup.coordinate,
            budget=budget,
            objective=objective,
            duration_days=duration_days,
            request_id=request_id,
        )
        plan.display_name = lookup.display_name
        return AddressPlan(lookup=lookup, plan=plan)

    def is_vehicle_in_target(self, position: Coordinate, shape: TargetingShape) -> bool:
        """Validate a vehicle position and test it against a targeting shape."""
        validate_coordinate(position)
        validate_shape(shape)
        return point_in_shape(position, shape, self.gateway)
