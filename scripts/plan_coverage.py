#!/usr/bin/env python3
"""geotargeting CLI: estimate coverage and budget for a targeting area.

Usage:
    python scripts/plan_coverage.py --address "Av. Paulista, 1000, São Paulo" --radius-km 5
    python scripts/plan_coverage.py --lat -22.9099 --lng -47.0626 --radius-km 1 --budget 1000
    python scripts/plan_coverage.py --states SP RJ --objective awareness --duration-days 14
    python scripts/plan_coverage.py --cities "Campinas, SP" "Curitiba, PR" --optimize
    python scripts/plan_coverage.py --polygon="-23.56,-46.64;-23.56,-46.62;-23.54,-46.62"
    python scripts/plan_coverage.py --states BA --center=-12.97,-38.50
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Ensure project root is on sys.path for consistent import resolution
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from config.defaults import DEFAULT_LOG_LEVEL, DEFAULT_OBJECTIVE  # noqa: E402
from config.settings import TargetingConfig  # noqa: E402
from geotargeting.analysis.budget_advisor import optimize_budget  # noqa: E402
from geotargeting.io.records import polygon_centroid  # noqa: E402
from geotargeting.models.targeting import (  # noqa: E402
    CityListShape,
    Coordinate,
    PolygonShape,
    RadiusShape,
    StateListShape,
    TargetingShape,
    polygon_from_pairs,
)
from geotargeting.planner import CoveragePlanner  # noqa: E402
from geotargeting.utils.logging_utils import configure_logging  # noqa: E402

OBJECTIVES = ["awareness", "traffic", "conversions", "engagement", "retention"]


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argparse parser; exactly one targeting mode must be given."""
    parser = argparse.ArgumentParser(
        prog="plan_coverage",
        description="geotargeting: coverage and budget estimate for a targeting area",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # ── Targeting area ───────────────────────────────────────────────────────────
    area = parser.add_mutually_exclusive_group(required=True)
    area.add_argument("--address", type=str, help="Free-text address for a radius campaign")
    area.add_argument("--lat", type=float, help="Radius centre latitude (requires --lng)")
    area.add_argument(
        "--polygon",
        type=str,
        metavar="LAT,LNG;...",
        help="Polygon vertices in order; pass with = when the first latitude is negative",
    )
    area.add_argument("--cities", type=str, nargs="+", metavar="CITY", help='e.g. "Campinas, SP"')
    area.add_argument("--states", type=str, nargs="+", metavar="UF", help="e.g. SP RJ")
    parser.add_argument("--lng", type=float, default=None, help="Radius centre longitude")
    parser.add_argument("--radius-km", type=float, default=None, help="Radius in km")
    parser.add_argument(
        "--center",
        type=str,
        default=None,
        metavar="LAT,LNG",
        help="Density centre for --polygon, --cities or --states (polygons default to the "
             "vertex centroid); pass with = when the latitude is negative",
    )

    # ── Campaign ─────────────────────────────────────────────────────────────────
    parser.add_argument("--budget", type=float, default=None, help="Campaign budget")
    parser.add_argument(
        "--objective", type=str, default=DEFAULT_OBJECTIVE, choices=OBJECTIVES,
        help="Campaign objective",
    )
    parser.add_argument("--duration-days", type=int, default=30, help="Campaign length in days")
    parser.add_argument(
        "--optimize",
        action="store_true",
        default=False,
        help="Also run the ROI budget optimizer",
    )

    # ── Output and logging ───────────────────────────────────────────────────────
    parser.add_argument(
        "--log-level",
        type=str,
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity level",
    )
    return parser


def _parse_vertex(text: str) -> tuple:
    lat, _, lng = text.partition(",")
    return float(lat), float(lng)


def args_to_shape(args: argparse.Namespace) -> Optional[TargetingShape]:
    """Build the targeting shape described by the CLI flags.

    Returns:
        The shape, or None for --address (resolved later by the planner).

    Raises:
        ValueError: On missing or malformed flag combinations.
    """
    if args.address:
        if args.radius_km is None:
            raise ValueError("--address requires --radius-km")
        return None
    if args.lat is not None:
        if args.lng is None or args.radius_km is None:
            raise ValueError("--lat requires --lng and --radius-km")
        return RadiusShape(center=Coordinate(args.lat, args.lng), radius_km=args.radius_km)
    if args.polygon:
        vertices = [v for v in args.polygon.split(";") if v.strip()]
        return polygon_from_pairs(_parse_vertex(v) for v in vertices)
    if args.cities:
        return CityListShape(cities={c.strip() for c in args.cities})
    return StateListShape(states={s.strip().upper() for s in args.states})


def args_to_center(args: argparse.Namespace, shape: Optional[TargetingShape]) -> Optional[Coordinate]:
    """Centre handed to the density heuristic.

    An explicit --center wins; a polygon otherwise uses its vertex centroid.
    Radius shapes return None so the planner falls back to the radius centre.
    """
    if args.center:
        if shape is None or isinstance(shape, RadiusShape):
            raise ValueError("--center applies to --polygon, --cities or --states only")
        return Coordinate(*_parse_vertex(args.center))
    if isinstance(shape, PolygonShape):
        return polygon_centroid(shape.vertices)
    return None


def _jsonable(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entrypoint: parse arguments, plan, print the result as JSON."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)
    logger = logging.getLogger("geotargeting.cli")

    try:
        shape = args_to_shape(args)
        center = args_to_center(args, shape)
    except ValueError as exc:
        parser.error(str(exc))

    planner = CoveragePlanner(TargetingConfig(log_level=args.log_level))
    try:
        if shape is None:
            result = planner.plan_for_address(
                args.address,
                radius_km=args.radius_km,
                budget=args.budget,
                objective=args.objective,
                duration_days=args.duration_days,
            )
            if result.plan is None:
                logger.error("Address lookup failed: %s", result.lookup.status)
                return 1
            plan = result.plan
        else:
            plan = planner.plan(
                shape,
                center=center,
                budget=args.budget,
                objective=args.objective,
                duration_days=args.duration_days,
            )
    except ValueError as exc:
        logger.error("Invalid targeting input: %s", exc)
        return 2
    finally:
        planner.gateway.close()

    output: Dict[str, Any] = {"plan": dataclasses.asdict(plan)}
    if args.optimize:
        output["optimization"] = dataclasses.asdict(
            optimize_budget(
                args.budget or plan.budget_suggestion.recommended,
                plan.coverage.area_km2,
                plan.duration_days,
                plan.objective,
                target_roi_percent=planner.config.target_roi_percent,
                avg_conversion_value=planner.config.avg_conversion_value,
            )
        )

    print(json.dumps(output, indent=2, ensure_ascii=False, default=_jsonable))
    return 0


if __name__ == "__main__":
    sys.exit(main())
