"""Command line interface for the meal planning assistant."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .client import API_BASE, PlannerApiClient
from .fixtures import default_demo_source
from .groceries import budget_usage
from .io import load_preferences, write_json
from .mapview import STRATEGIES, compute_map_viewport
from .session import PlanningSession
from .stores import DEFAULT_RADIUS_MILES, RADIUS_CHOICES, filter_stores


def _optional_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value else None


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapmeals",
        description="Plan a week of budget meals and find nearby SNAP-friendly stores.",
    )
    parser.add_argument(
        "--api-base",
        default=os.environ.get("SNAPMEALS_API_BASE", API_BASE),
        help="Base URL of the planning service.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=_optional_float(os.environ.get("SNAPMEALS_TIMEOUT")),
        help="Request timeout in seconds. Defaults to waiting indefinitely.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser(
        "plan", help="Request a weekly meal plan for a household."
    )
    plan_parser.add_argument("--preferences", required=True, type=Path)
    plan_parser.add_argument("--out-json", required=True, type=Path)

    stores_parser = subparsers.add_parser(
        "stores", help="List stores near a zip code, nearest first."
    )
    stores_parser.add_argument("--zip", required=True, dest="zip_code")
    stores_parser.add_argument("--out-json", required=True, type=Path)
    stores_parser.add_argument(
        "--radius",
        type=int,
        choices=RADIUS_CHOICES,
        default=DEFAULT_RADIUS_MILES,
        help="Only keep stores within this many miles.",
    )
    stores_parser.add_argument(
        "--all-stores",
        action="store_true",
        help="Include stores that do not accept SNAP.",
    )
    stores_parser.add_argument(
        "--no-demo",
        action="store_true",
        help="Do not merge the local demo supermarket datasets.",
    )
    stores_parser.add_argument("--map-strategy", choices=STRATEGIES, default="bounds")

    return parser


def _handle_plan(client: PlannerApiClient, preferences_path: Path, out_json: Path) -> int:
    preferences = load_preferences(preferences_path)
    session = PlanningSession(client, preferences=preferences)
    state = session.generate_plan()
    if state.plan_error is not None:
        logging.error("%s", state.plan_error)
        return 1

    plan = state.plan
    usage = budget_usage(state.preferences, plan.ingredients)
    logging.info(
        "Planned %d days, estimated %.2f for recipes and %.2f for groceries (%.0f%% of budget)",
        len(plan.weekly_plan.days),
        plan.weekly_plan.est_total_cost,
        usage.total,
        usage.percent,
    )
    payload = plan.to_dict()
    payload["preferences"] = state.preferences.to_dict()
    payload["budget"] = usage.to_dict()
    write_json(out_json, payload)
    return 0


def _handle_stores(
    client: PlannerApiClient,
    zip_code: str,
    out_json: Path,
    radius: int,
    snap_only: bool,
    use_demo: bool,
    map_strategy: str,
) -> int:
    local_sources = [default_demo_source()] if use_demo else []
    session = PlanningSession(client, local_sources=local_sources)
    state = session.load_stores(zip_code)
    if state.stores_error is not None:
        logging.error("%s", state.stores_error)
        return 1
    if len(state.store_zip) != 5:
        logging.error("Enter a 5-digit zip code to find stores.")
        return 2

    stores = filter_stores(state.stores, radius_miles=radius, snap_only=snap_only)
    viewport = compute_map_viewport(stores, strategy=map_strategy)
    write_json(
        out_json,
        {
            "zip_code": state.store_zip,
            "stores": [store.to_dict() for store in stores],
            "map": viewport.to_dict(),
        },
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = _create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )
    client = PlannerApiClient(base_url=args.api_base, timeout=args.timeout)

    if args.command == "plan":
        try:
            return _handle_plan(client, args.preferences, args.out_json)
        except (OSError, ValueError) as exc:
            logging.error("%s", exc)
            return 1

    if args.command == "stores":
        try:
            return _handle_stores(
                client,
                zip_code=args.zip_code,
                out_json=args.out_json,
                radius=args.radius,
                snap_only=not args.all_stores,
                use_demo=not args.no_demo,
                map_strategy=args.map_strategy,
            )
        except OSError as exc:
            logging.error("%s", exc)
            return 1

    parser.error(f"Unknown command: {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - exercised via tests
    sys.exit(main())
