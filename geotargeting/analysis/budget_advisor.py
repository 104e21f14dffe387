"""Budget suggestion and ROI simulation for geotargeting.

Objective classes form a closed set (awareness, traffic, conversions,
engagement, retention); "consideration" and "conversion" are accepted as
aliases. Cost lookups fall back to the traffic rate for unknown objectives.

optimize_budget is a bounded greedy reduction, not a numeric optimizer: it
starts at the recommended budget and shrinks it by 10% per step, at most 10
times, until the simulated ROI reaches the target. It can stop short of the
target, and it never searches upward.
"""

from __future__ import annotations

import logging
from typing import Optional

from config.defaults import (
    CONVERSION_RATES,
    COST_PER_KM2_PER_DAY,
    CURRENCY_SYMBOL,
    DEFAULT_CONVERSION_RATE,
    DEFAULT_CONVERSION_VALUE,
    DEFAULT_OBJECTIVE,
    DEFAULT_TARGET_ROI_PERCENT,
    IMPRESSIONS_PER_PERSON,
    MIN_BUDGET_FACTOR,
    MIN_BUDGET_FLOOR,
    OBJECTIVE_ALIASES,
    OPTIMIZED_BUDGET_FACTOR,
    OPTIMIZER_ASSUMED_DENSITY,
    OPTIMIZER_MAX_ITERATIONS,
    OPTIMIZER_STEP_FACTOR,
)
from geotargeting.analysis.coverage import round_half_up
from geotargeting.models.budget import (
    BudgetOptimization,
    BudgetSufficiency,
    BudgetSuggestion,
    ROISimulation,
)

logger = logging.getLogger(__name__)


def normalize_objective(objective: Optional[str]) -> Optional[str]:
    """Map an objective name (any case, aliases allowed) to its canonical key.

    Returns:
        Canonical objective key, or None if the objective is not recognized.
    """
    if not objective:
        return None
    key = objective.strip().lower()
    key = OBJECTIVE_ALIASES.get(key, key)
    return key if key in COST_PER_KM2_PER_DAY else None


def format_currency(amount: float) -> str:
    """Format an amount as e.g. ``R$ 1,234.56``."""
    return f"{CURRENCY_SYMBOL} {amount:,.2f}"


def suggest_budget(area_km2: float, objective: str, duration_days: int) -> BudgetSuggestion:
    """Suggest minimum, recommended and optimized budgets for a coverage area.

    The minimum is floored at MIN_BUDGET_FLOOR. For small areas or short
    campaigns that floor can exceed the base cost; recommended and optimized
    are then raised to keep minimum <= recommended <= optimized.

    Args:
        area_km2: Covered area.
        objective: Objective class; unknown values use the traffic rate.
        duration_days: Campaign length in days.

    Returns:
        BudgetSuggestion.
    """
    key = normalize_objective(objective)
    if key is None:
        logger.debug("Unknown objective %r — using %s cost rate", objective, DEFAULT_OBJECTIVE)
        key = DEFAULT_OBJECTIVE

    base = area_km2 * COST_PER_KM2_PER_DAY[key] * duration_days
    minimum = max(MIN_BUDGET_FLOOR, base * MIN_BUDGET_FACTOR)
    recommended = max(base, minimum)
    optimized = max(base * OPTIMIZED_BUDGET_FACTOR, recommended)

    return BudgetSuggestion(
        minimum=minimum,
        recommended=recommended,
        optimized=optimized,
        rationale=(
            f"Based on {area_km2:.2f} km² of coverage over {duration_days} days "
            f"for the {objective} objective"
        ),
    )


def simulate_roi(
    investment: float,
    reach: int,
    objective: str,
    conversion_rate_override: Optional[float] = None,
    avg_conversion_value: float = DEFAULT_CONVERSION_VALUE,
) -> ROISimulation:
    """Project conversions, revenue and ROI for an investment.

    The conversion rate comes from the objective table. The override only
    applies when the objective is unrecognized; with neither, 2% is used.

    Args:
        investment: Amount spent.
        reach: Estimated unique people reached.
        objective: Objective class.
        conversion_rate_override: Rate for unrecognized objectives.
        avg_conversion_value: Revenue per conversion.

    Returns:
        ROISimulation with roi_percent rounded to 2 decimals (0 for zero investment).
    """
    key = normalize_objective(objective)
    if key is not None:
        rate = CONVERSION_RATES[key]
    elif conversion_rate_override is not None:
        rate = conversion_rate_override
    else:
        rate = DEFAULT_CONVERSION_RATE

    impressions = reach * IMPRESSIONS_PER_PERSON
    conversions = round_half_up(reach * rate)
    revenue = conversions * avg_conversion_value
    roi_absolute = revenue - investment
    roi_percent = roi_absolute / investment * 100.0 if investment > 0 else 0.0

    return ROISimulation(
        investment=investment,
        estimated_reach=reach,
        estimated_impressions=impressions,
        estimated_conversions=conversions,
        estimated_revenue=revenue,
        roi_absolute=roi_absolute,
        roi_percent=round(roi_percent, 2),
    )


def is_budget_sufficient(
    budget: float,
    area_km2: float,
    duration_days: int,
    objective: str,
) -> BudgetSufficiency:
    """Check a budget against the suggested minimum for the area and objective."""
    suggestion = suggest_budget(area_km2, objective, duration_days)
    sufficient = budget >= suggestion.minimum
    shortfall = max(0.0, suggestion.minimum - budget)

    if not sufficient:
        message = f"Insufficient budget. Recommended minimum: {format_currency(suggestion.minimum)}"
    elif budget >= suggestion.optimized:
        message = "Excellent budget! Allows maximum optimization."
    elif budget >= suggestion.recommended:
        message = "Adequate budget for good results."
    else:
        message = "Minimum budget met. Consider increasing it for better results."

    return BudgetSufficiency(
        sufficient=sufficient,
        minimum=suggestion.minimum,
        shortfall=shortfall,
        message=message,
    )


def optimize_budget(
    current_budget: float,
    area_km2: float,
    duration_days: int,
    objective: str,
    target_roi_percent: float = DEFAULT_TARGET_ROI_PERCENT,
    avg_conversion_value: float = DEFAULT_CONVERSION_VALUE,
) -> BudgetOptimization:
    """Shrink the recommended budget until the simulated ROI meets the target.

    Reach is assumed to be area_km2 * OPTIMIZER_ASSUMED_DENSITY. The loop
    stops when the target is met or after OPTIMIZER_MAX_ITERATIONS steps.

    Args:
        current_budget: The advertiser's current budget, quoted in the rationale.
        area_km2: Covered area.
        duration_days: Campaign length in days.
        objective: Objective class.
        target_roi_percent: ROI percentage to reach.
        avg_conversion_value: Revenue per conversion.

    Returns:
        BudgetOptimization with the budget rounded to 2 decimals.
    """
    suggestion = suggest_budget(area_km2, objective, duration_days)
    reach = round_half_up(area_km2 * OPTIMIZER_ASSUMED_DENSITY)

    budget = suggestion.recommended
    simulation = simulate_roi(budget, reach, objective, avg_conversion_value=avg_conversion_value)
    iterations = 0
    while simulation.roi_percent < target_roi_percent and iterations < OPTIMIZER_MAX_ITERATIONS:
        budget *= OPTIMIZER_STEP_FACTOR
        simulation = simulate_roi(
            budget, reach, objective, avg_conversion_value=avg_conversion_value
        )
        iterations += 1

    target_met = simulation.roi_percent >= target_roi_percent
    if target_met:
        rationale = f"Budget optimized to reach a {target_roi_percent:g}% ROI"
    else:
        rationale = (
            f"Budget adjusted for the best ROI reachable "
            f"({simulation.roi_percent:.1f}% after {iterations} reductions)"
        )
    rationale += f"; current budget is {format_currency(current_budget)}"

    logger.debug(
        "Budget optimizer: %d iterations, target_met=%s, budget=%.2f",
        iterations, target_met, budget,
    )
    return BudgetOptimization(
        optimized_budget=round(budget, 2),
        rationale=rationale,
        simulation=simulation,
        target_met=target_met,
        iterations=iterations,
    )
