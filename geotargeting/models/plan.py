"""Planner output model for geotargeting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from geotargeting.models.budget import BudgetSufficiency, BudgetSuggestion, ROISimulation
from geotargeting.models.coverage import CoverageEstimate
from geotargeting.models.geocode import GeocodeResult
from geotargeting.models.targeting import Coordinate, TargetingShape


@dataclass
class TargetingPlan:
    """Coverage and budget figures for one targeting configuration."""

    shape: TargetingShape
    coverage: CoverageEstimate
    budget_suggestion: BudgetSuggestion
    objective: str
    duration_days: int
    center: Optional[Coordinate] = None
    display_name: str = ""
    sufficiency: Optional[BudgetSufficiency] = None
    roi: Optional[ROISimulation] = None
    warnings: List[str] = field(default_factory=list)


@dataclass
class AddressPlan:
    """Plan built from a free-text address; plan is None when the lookup failed."""

    lookup: GeocodeResult
    plan: Optional[TargetingPlan] = None
