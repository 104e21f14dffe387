"""Budget advisor data models for geotargeting."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class BudgetSuggestion:
    """Suggested spend for a coverage area.

    Invariant: minimum <= recommended <= optimized.
    """

    minimum: float
    recommended: float
    optimized: float
    rationale: str = ""


@dataclass
class ROISimulation:
    """Projected return for a given investment and reach."""

    investment: float
    estimated_reach: int
    estimated_impressions: int
    estimated_conversions: int
    estimated_revenue: float
    roi_absolute: float
    roi_percent: float    # Rounded to 2 decimals; 0 when investment is 0


@dataclass
class BudgetSufficiency:
    """Outcome of checking a budget against the suggested minimum."""

    sufficient: bool
    minimum: float
    shortfall: float      # max(0, minimum - budget)
    message: str = ""


@dataclass
class BudgetOptimization:
    """Result of the bounded greedy budget reduction."""

    optimized_budget: float
    rationale: str
    simulation: ROISimulation
    target_met: bool = False
    iterations: int = 0
