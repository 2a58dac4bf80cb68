"""Command-line interface for the warehouse planner."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .calculator import EquipmentType, PlanInput, PlanResult, compute_plan
from .config import Settings
from .errors import NoSavedPlanError, PlannerError, PreviewTooLargeError
from .logging_config import configure_logging, get_logger
from .scene import SceneSpec, render_html
from .storage import PlanStore

logger = get_logger(__name__)


def _load_input(path: str | Path) -> Dict[str, Any]:
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def _print_plan(plan: PlanInput) -> None:
    print("Plan:")
    print(f"  Building: {plan.building_length:g} × {plan.building_width:g} ft"
          f" (ceiling {plan.ceiling_height:g} ft)")
    print(f"  Pallet: {plan.pallet_width:g} × {plan.pallet_depth:g} in,"
          f" {plan.pallets_per_level} per level")
    print(f"  Rack: {plan.rack_beam_length:g} in beam × {plan.rack_depth:g} in deep")
    print(f"  Equipment: {plan.equipment_type}\n")


def _print_result(result: PlanResult) -> None:
    print(f"Racks per row: {result.rack_count_per_row}")
    print(f"Rack rows: {result.number_of_rack_rows}")
    print(f"Total racks: {result.total_racks}")
    print(f"Total pallets: {result.total_pallets}")
    print(f"Used sq ft: {result.used_area_sqft:.2f}")
    print(f"Unused sq ft: {result.unused_area_sqft:.2f}")
    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"- {warning}")


def _write_scene(result: PlanResult, path: str) -> None:
    try:
        html = render_html(SceneSpec.from_result(result), full_html=True)
    except PreviewTooLargeError as exc:
        print(f"\n{exc}", file=sys.stderr)
        return
    with open(path, "w", encoding="utf-8") as fh:
        fh.write(html)
    print(f"\n3D preview written to {path}")


def _cmd_calculate(args: argparse.Namespace, store: PlanStore) -> int:
    plan = PlanInput.from_dict(_load_input(args.input))
    result = compute_plan(plan)
    _print_result(result)
    if args.scene:
        _write_scene(result, args.scene)
    if args.save:
        store.save(plan)
        print("\nPlan saved!")
    return 0


def _cmd_save(args: argparse.Namespace, store: PlanStore) -> int:
    store.save(PlanInput.from_dict(_load_input(args.input)))
    print("Plan saved!")
    return 0


def _cmd_load(args: argparse.Namespace, store: PlanStore) -> int:
    try:
        plan = store.load()
    except NoSavedPlanError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    _print_plan(plan)
    result = compute_plan(plan)
    _print_result(result)
    if args.scene:
        _write_scene(result, args.scene)
    return 0


def _cmd_clear(args: argparse.Namespace, store: PlanStore) -> int:
    store.clear()
    print("Saved plan cleared.")
    return 0


def _cmd_equipment(args: argparse.Namespace, store: PlanStore) -> int:
    for member in EquipmentType:
        profile = member.profile
        print(
            f"- {member.value}: aisle {profile.aisle_width_in:g} in,"
            f" intersecting aisle {profile.intersecting_aisle_width_in:g} in"
        )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate how many racks and pallets fit in a warehouse."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser("calculate", help="Calculate a rack layout.")
    calculate.add_argument(
        "input",
        type=str,
        help="Path to a JSON file describing the plan (use '-' for stdin).",
    )
    calculate.add_argument("--scene", help="Write a 3D preview HTML file to this path.")
    calculate.add_argument(
        "--save", action="store_true", help="Also store the plan in the saved-plan slot."
    )
    calculate.set_defaults(handler=_cmd_calculate)

    save = subparsers.add_parser("save", help="Store a plan in the saved-plan slot.")
    save.add_argument("input", type=str, help="Plan JSON file (use '-' for stdin).")
    save.set_defaults(handler=_cmd_save)

    load = subparsers.add_parser("load", help="Load the saved plan and calculate it.")
    load.add_argument("--scene", help="Write a 3D preview HTML file to this path.")
    load.set_defaults(handler=_cmd_load)

    clear = subparsers.add_parser("clear", help="Remove the saved plan.")
    clear.set_defaults(handler=_cmd_clear)

    equipment = subparsers.add_parser("equipment", help="List equipment profiles.")
    equipment.set_defaults(handler=_cmd_equipment)
    return parser


def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    args = build_parser().parse_args(argv)
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.log_level, format_json=settings.log_json)
    store = PlanStore(settings.store_path, settings.slot)

    try:
        return args.handler(args, store)
    except (PlannerError, ValueError, OSError) as exc:
        logger.debug("command failed", command=args.command, error=str(exc))
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
