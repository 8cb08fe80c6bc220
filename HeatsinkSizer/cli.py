"""Command-line heat sink sizing without FreeCAD."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from HeatsinkSizer.export import write_cad_json, write_csv_report
from HeatsinkSizer.input_schema import (
    errors,
    load_input_file,
    manufacturability_warnings,
    thermal_input_from_mapping,
    validate_inputs,
)
from HeatsinkSizer.thermal_model import (
    MATERIALS,
    InvalidInputError,
    compute_breakdown,
    get_material,
)

# flag dest -> ThermalInput field
_FIELD_FLAGS = {
    "ambient": ("ambient_temp_c", "Ambient temperature (°C)"),
    "max_surface": ("max_surface_temp_c", "Max surface temperature (°C)"),
    "power": ("power_w", "Power to dissipate (W)"),
    "length": ("length_mm", "Heat sink length (mm)"),
    "height": ("height_mm", "Overall height incl. base (mm)"),
    "fin_thickness": ("fin_thickness_mm", "Fin thickness (mm)"),
    "base_thickness": ("base_thickness_mm", "Base thickness (mm)"),
    "emissivity": ("emissivity", "Surface emissivity (0-1); overrides --material"),
    "air_velocity": ("air_velocity_m_s", "Air velocity for forced convection (m/s)"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="heatsink-sizer",
        description="Size a straight-fin heat sink for natural or forced air cooling.",
    )
    parser.add_argument("--input", "-i", help="JSON file with input values.")
    for dest, (_, help_text) in _FIELD_FLAGS.items():
        parser.add_argument(f"--{dest.replace('_', '-')}", dest=dest, type=float, help=help_text)
    parser.add_argument(
        "--convection",
        choices=["natural", "forced"],
        help="Convection mode (default natural).",
    )
    parser.add_argument("--material", choices=sorted(MATERIALS), help="Material key.")
    parser.add_argument("--csv", help="Write the detailed CSV report here.")
    parser.add_argument("--cad-json", help="Write the CAD-ready JSON here.")
    parser.add_argument("--plot", help="Write a fins-vs-power chart (PNG) here.")
    parser.add_argument(
        "--list-materials",
        action="store_true",
        help="Print the material library and exit.",
    )
    return parser


def collect_inputs(args: argparse.Namespace) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    if args.input:
        data.update(load_input_file(Path(args.input)))
    for dest, (field, _) in _FIELD_FLAGS.items():
        value = getattr(args, dest)
        if value is not None:
            data[field] = value
    if args.convection:
        data["convection_type"] = args.convection
    if args.material:
        data["material"] = args.material
    return data


def _print_materials() -> None:
    for key, mat in MATERIALS.items():
        print(
            f"{key:14s} {mat.label:16s} k={mat.thermal_conductivity_w_mk:g} W/m·K  "
            f"eps={mat.emissivity:g}"
        )


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_materials:
        _print_materials()
        return 0

    try:
        raw = collect_inputs(args)
        inputs = thermal_input_from_mapping(raw)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2
    except InvalidInputError as e:
        print(f"Input error: {e.reason}", file=sys.stderr)
        return 2

    violations = validate_inputs(inputs)
    blocking = errors(violations)
    if blocking:
        print("Input validation error:", file=sys.stderr)
        for v in blocking:
            print(f"- {v}", file=sys.stderr)
        return 2

    try:
        breakdown = compute_breakdown(inputs)
    except InvalidInputError as e:
        print(f"Calculation error: {e.reason}", file=sys.stderr)
        return 2

    result = breakdown.result
    material = get_material(raw.get("material")) if raw.get("material") else None

    print(f"Convection: {inputs.convection_type.value}")
    print(f"Heat sink width: {result.width_mm:.1f} mm")
    print(f"Fin spacing: {result.spacing_mm:.1f} mm")
    print(f"Number of fins: {result.fin_count}")
    print(f"Dissipation at T_s max: {breakdown.total_dissipation_w:.2f} W")

    warnings = [v for v in violations if v not in blocking]
    warnings += manufacturability_warnings(inputs, result)
    if warnings:
        print("\nWarnings:", file=sys.stderr)
        for w in warnings:
            print(f"- {w}", file=sys.stderr)

    try:
        if args.csv:
            write_csv_report(Path(args.csv), inputs, breakdown, material=material)
        if args.cad_json:
            write_cad_json(Path(args.cad_json), inputs, result, material=material)
        if args.plot:
            from HeatsinkSizer.plotting import plot_for_inputs

            plot_for_inputs(inputs, path=Path(args.plot))
    except OSError as e:
        print(f"Output error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
