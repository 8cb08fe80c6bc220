"""CSV report and CAD-ready JSON export of a sizing run."""
from __future__ import annotations

import csv
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    from HeatsinkSizer.console import log
    from HeatsinkSizer.design_defaults import MANUFACTURING
    from HeatsinkSizer.geometry_builder import build_fin_layout
    from HeatsinkSizer.thermal_model import (
        ConvectionType,
        Material,
        ThermalBreakdown,
        ThermalInput,
        ThermalResult,
    )
except ImportError:  # pragma: no cover
    from console import log  # type: ignore[no-redef]
    from design_defaults import MANUFACTURING  # type: ignore[no-redef]
    from geometry_builder import build_fin_layout  # type: ignore[no-redef]
    from thermal_model import (  # type: ignore[no-redef]
        ConvectionType,
        Material,
        ThermalBreakdown,
        ThermalInput,
        ThermalResult,
    )

Row = List[Any]

EXPORT_PREFIXES = {
    "csv": "heat-sink-calculations",
    "cad": "heat-sink-cad",
}
EXPORT_SUFFIXES = {"csv": ".csv", "cad": ".json"}


def _iso_timestamp(timestamp: Optional[datetime]) -> str:
    when = timestamp or datetime.now(timezone.utc)
    return when.isoformat()


def default_export_name(kind: str, when: Optional[date] = None) -> str:
    """File name used by the web calculator, e.g. heat-sink-cad-2024-05-01.json."""
    if kind not in EXPORT_PREFIXES:
        raise ValueError(f"Unknown export kind: {kind}")
    day = (when or date.today()).isoformat()
    return f"{EXPORT_PREFIXES[kind]}-{day}{EXPORT_SUFFIXES[kind]}"


# ---------------------------------------------------------------------------
# CSV report
# ---------------------------------------------------------------------------

def csv_report_rows(
    inputs: ThermalInput,
    breakdown: ThermalBreakdown,
    material: Optional[Material] = None,
    timestamp: Optional[datetime] = None,
) -> List[Row]:
    """Two-column report: inputs, results and every intermediate value."""
    result = breakdown.result
    coeffs = breakdown.coefficients
    forced = inputs.convection_type is ConvectionType.FORCED

    rows: List[Row] = [
        ["Heat Sink Calculation Report", ""],
        ["Timestamp", _iso_timestamp(timestamp)],
        ["", ""],
        ["INPUT PARAMETERS", ""],
        ["Ambient Temperature (°C)", inputs.ambient_temp_c],
        ["Max Surface Temperature (°C)", inputs.max_surface_temp_c],
        ["Power Dissipation (W)", inputs.power_w],
        ["Length (mm)", inputs.length_mm],
        ["Height (mm)", inputs.height_mm],
        ["Fin Thickness (mm)", inputs.fin_thickness_mm],
        ["Base Thickness (mm)", inputs.base_thickness_mm],
        ["Convection", inputs.convection_type.value],
        ["Air Velocity (m/s)", inputs.air_velocity_m_s if forced else "N/A"],
        ["Material", material.label if material else "N/A"],
        ["Thermal Conductivity (W/m·K)", material.thermal_conductivity_w_mk if material else "N/A"],
        ["Material Density (kg/m³)", material.density_kg_m3 if material else "N/A"],
        ["Specific Heat (J/kg·K)", material.specific_heat_j_kgk if material else "N/A"],
        ["Surface Emissivity", inputs.emissivity],
        ["", ""],
        ["CALCULATED RESULTS", ""],
        ["Heat Sink Width (mm)", result.width_mm],
        ["Fin Spacing (mm)", result.spacing_mm],
        ["Number of Fins", result.fin_count],
        ["", ""],
        ["DETAILED CALCULATIONS", ""],
        ["Temperature Difference (°C)", breakdown.delta_t],
        ["Surface Temperature (K)", breakdown.surface_temp_k],
        ["Ambient Temperature (K)", breakdown.ambient_temp_k],
        ["Average Temperature (K)", breakdown.average_temp_k],
        ["Optimal Spacing (m)", breakdown.optimal_spacing_m],
        ["External Heat Transfer Coefficient (W/m²·K)", coeffs.h1],
        ["Internal Heat Transfer Coefficient (W/m²·K)", coeffs.h2],
    ]
    if forced:
        rows += [
            ["Reynolds Number (plate)", coeffs.reynolds],
            ["Prandtl Number", coeffs.prandtl],
            ["Channel Hydraulic Diameter (m)", coeffs.hydraulic_diameter_m],
            ["Reynolds Number (channel)", coeffs.channel_reynolds],
        ]
    rows += [
        ["External Surface Area (m²)", breakdown.external_area_m2],
        ["Internal Surface Area (m²)", breakdown.internal_area_m2],
        ["Radiation Area (m²)", breakdown.radiation_area_m2],
        ["External Convection Heat Transfer (W)", breakdown.external_convection_w],
        ["External Radiation Heat Transfer (W)", breakdown.external_radiation_w],
        ["Internal Convection Heat Transfer (W)", breakdown.internal_convection_w],
        ["Internal Radiation Heat Transfer (W)", breakdown.internal_radiation_w],
        ["Total Heat Dissipation (W)", breakdown.total_dissipation_w],
    ]
    return rows


def write_csv_report(
    path: Path,
    inputs: ThermalInput,
    breakdown: ThermalBreakdown,
    material: Optional[Material] = None,
    timestamp: Optional[datetime] = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = csv_report_rows(inputs, breakdown, material=material, timestamp=timestamp)
    with path.open("w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(rows)
    log(f"CSV report written to {path}")
    return path


# ---------------------------------------------------------------------------
# CAD JSON
# ---------------------------------------------------------------------------

def cad_document(
    inputs: ThermalInput,
    result: ThermalResult,
    material: Optional[Material] = None,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Geometry, material and manufacturing data for re-modelling in CAD."""
    layout = build_fin_layout(inputs, result)
    fin_dimensions = {
        "thickness": layout.fin_thickness_mm,
        "height": layout.fin_height_mm,
        "length": layout.length_mm,
    }

    material_block: Dict[str, Any] = {"name": material.label if material else None}
    if material is not None:
        material_block["properties"] = {
            "thermalConductivity": material.thermal_conductivity_w_mk,
            "density": material.density_kg_m3,
            "specificHeat": material.specific_heat_j_kgk,
            "emissivity": material.emissivity,
        }

    thermal: Dict[str, Any] = {
        "ambientTemperature": inputs.ambient_temp_c,
        "maxSurfaceTemperature": inputs.max_surface_temp_c,
        "powerDissipation": inputs.power_w,
        "surfaceEmissivity": inputs.emissivity,
    }
    if inputs.convection_type is ConvectionType.FORCED:
        thermal["airVelocity"] = inputs.air_velocity_m_s

    return {
        "metadata": {
            "title": "Heat Sink Design",
            "software": "HeatsinkSizer",
            "version": "1.0",
            "timestamp": _iso_timestamp(timestamp),
            "units": {
                "length": "mm",
                "temperature": "°C",
                "power": "W",
                "thermalConductivity": "W/m·K",
            },
        },
        "design": {
            "type": "heat_sink_finned",
            "application": f"{inputs.convection_type.value}_convection",
            "geometry": {
                "overall": {
                    "length": layout.length_mm,
                    "width": layout.width_mm,
                    "height": layout.height_mm,
                    "volume": layout.volume_cm3,
                },
                "base": {
                    "length": layout.length_mm,
                    "width": layout.width_mm,
                    "thickness": layout.base_thickness_mm,
                },
                "fins": {
                    "count": layout.fin_count,
                    "thickness": layout.fin_thickness_mm,
                    "height": layout.fin_height_mm,
                    "spacing": layout.spacing_mm,
                    "length": layout.length_mm,
                },
            },
            "material": material_block,
            "thermal": thermal,
        },
        "manufacturing": MANUFACTURING,
        "cad_features": {
            "coordinate_system": "origin_at_base_corner",
            "base_sketch": {
                "rectangle": {"width": layout.width_mm, "length": layout.length_mm},
            },
            "fins": [
                {
                    "fin_number": i + 1,
                    "position_x": x,
                    "dimensions": dict(fin_dimensions),
                }
                for i, x in enumerate(layout.fin_centers_mm)
            ],
            "extrude_operations": {
                "base": {"height": layout.base_thickness_mm, "operation": "add"},
                "fins": {
                    "height": layout.fin_height_mm,
                    "operation": "add",
                    "pattern": "linear_array",
                },
            },
        },
    }


def write_cad_json(
    path: Path,
    inputs: ThermalInput,
    result: ThermalResult,
    material: Optional[Material] = None,
    timestamp: Optional[datetime] = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    document = cad_document(inputs, result, material=material, timestamp=timestamp)
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    log(f"CAD JSON written to {path}")
    return path
