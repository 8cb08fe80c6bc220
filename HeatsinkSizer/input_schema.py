"""Input parameter schema, validation pass and input parsing."""
from __future__ import annotations

import difflib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

try:
    from HeatsinkSizer import design_defaults
    from HeatsinkSizer.thermal_model import (
        ConvectionType,
        InvalidInputError,
        MATERIALS,
        ThermalInput,
        ThermalResult,
        find_material,
    )
except ImportError:  # pragma: no cover
    import design_defaults  # type: ignore[no-redef]
    from thermal_model import (  # type: ignore[no-redef]
        ConvectionType,
        InvalidInputError,
        MATERIALS,
        ThermalInput,
        ThermalResult,
        find_material,
    )


ERROR = "error"
WARNING = "warning"


@dataclass
class ParameterSpec:
    """Description of a single numeric input field."""

    name: str
    unit: str
    description: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    # min_value itself is rejected unless inclusive
    inclusive_min: bool = False


@dataclass(frozen=True)
class Violation:
    field: str
    message: str
    severity: str = ERROR

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


INPUT_PARAMETERS: List[ParameterSpec] = [
    ParameterSpec("ambient_temp_c", "°C", "Ambient temperature T_amb", -50.0, 150.0, True),
    ParameterSpec("max_surface_temp_c", "°C", "Max surface temperature T_s", -50.0, 300.0, True),
    ParameterSpec("power_w", "W", "Power to dissipate", 0.0, 1e5),
    ParameterSpec("length_mm", "mm", "Heat sink length (along the fins)", 0.0, 1e4),
    ParameterSpec("height_mm", "mm", "Overall height, base included", 0.0, 1e4),
    ParameterSpec("fin_thickness_mm", "mm", "Fin thickness", 0.0, 1e3),
    ParameterSpec("base_thickness_mm", "mm", "Base thickness", 0.0, 1e3),
    ParameterSpec("emissivity", "", "Surface emissivity", 0.0, 1.0, True),
    ParameterSpec("air_velocity_m_s", "m/s", "Air velocity (forced convection)", 0.0, 100.0),
]

PARAMETERS_BY_NAME: Dict[str, ParameterSpec] = {p.name: p for p in INPUT_PARAMETERS}

# camelCase keys of the web calculator report format
_ALIASES = {
    "ambientTemp": "ambient_temp_c",
    "maxSurfaceTemp": "max_surface_temp_c",
    "power": "power_w",
    "length": "length_mm",
    "height": "height_mm",
    "finThickness": "fin_thickness_mm",
    "baseThickness": "base_thickness_mm",
    "convectionType": "convection_type",
    "airVelocity": "air_velocity_m_s",
}

ACCEPTED_KEYS = tuple(design_defaults.DEFAULT_INPUTS) + ("material",)


# ---------------------------------------------------------------------------
# Validation pass
# ---------------------------------------------------------------------------

def _check_range(spec: ParameterSpec, value: float) -> Optional[str]:
    if spec.min_value is not None:
        if value < spec.min_value or (value == spec.min_value and not spec.inclusive_min):
            relation = "at least" if spec.inclusive_min else "greater than"
            return f"{spec.description} must be {relation} {spec.min_value:g} {spec.unit}".rstrip()
    if spec.max_value is not None and value > spec.max_value:
        return f"{spec.description} must not exceed {spec.max_value:g} {spec.unit}".rstrip()
    return None


def validate_inputs(inputs: ThermalInput) -> List[Violation]:
    """Return every error and advisory warning found in ``inputs``."""
    violations: List[Violation] = []
    forced = inputs.convection_type is ConvectionType.FORCED

    for spec in INPUT_PARAMETERS:
        value = getattr(inputs, spec.name)
        if spec.name == "air_velocity_m_s":
            if not forced:
                continue
            if value is None:
                violations.append(
                    Violation(spec.name, "Forced convection requires an air velocity")
                )
                continue
        message = _check_range(spec, float(value))
        if message:
            violations.append(Violation(spec.name, message))

    if inputs.max_surface_temp_c <= inputs.ambient_temp_c:
        violations.append(
            Violation(
                "max_surface_temp_c",
                "Max surface temperature must be above ambient temperature",
            )
        )
    if inputs.base_thickness_mm > 0 and inputs.height_mm <= inputs.base_thickness_mm:
        violations.append(
            Violation("height_mm", "Height must exceed base thickness (fin height > 0)")
        )

    # advisory
    if 0 < inputs.fin_thickness_mm < design_defaults.MIN_FIN_THICKNESS_MM:
        violations.append(
            Violation(
                "fin_thickness_mm",
                f"Fins thinner than {design_defaults.MIN_FIN_THICKNESS_MM:g} mm "
                "are hard to machine",
                WARNING,
            )
        )
    t_film = (inputs.ambient_temp_c + inputs.max_surface_temp_c) / 2.0
    low, high = design_defaults.AIR_PROPERTIES_VALID_RANGE_C
    if not low <= t_film <= high:
        violations.append(
            Violation(
                "max_surface_temp_c",
                f"Film temperature {t_film:.0f} °C is outside {low:g}–{high:g} °C; "
                "fixed air properties may be inaccurate",
                WARNING,
            )
        )
    if 0.0 <= inputs.emissivity < design_defaults.LOW_EMISSIVITY:
        violations.append(
            Violation(
                "emissivity",
                "Low emissivity: radiation is negligible, consider anodizing",
                WARNING,
            )
        )
    if not forced and inputs.air_velocity_m_s:
        violations.append(
            Violation(
                "air_velocity_m_s",
                "Air velocity is ignored for natural convection",
                WARNING,
            )
        )
    if (
        forced
        and inputs.air_velocity_m_s is not None
        and inputs.air_velocity_m_s > design_defaults.MAX_TYPICAL_FAN_VELOCITY_M_S
    ):
        violations.append(
            Violation(
                "air_velocity_m_s",
                "Air velocity above typical fan range; channel flow may be turbulent",
                WARNING,
            )
        )
    return violations


def manufacturability_warnings(inputs: ThermalInput, result: ThermalResult) -> List[Violation]:
    """Warnings that depend on the sized geometry."""
    warnings: List[Violation] = []
    if result.spacing_mm < design_defaults.MIN_FIN_GAP_MM:
        warnings.append(
            Violation(
                "spacing_mm",
                f"Fin gap {result.spacing_mm:.1f} mm is below the "
                f"{design_defaults.MIN_FIN_GAP_MM:g} mm CNC minimum "
                f"(tool Ø{design_defaults.DEFAULT_TOOL_DIAM_MM:g} mm)",
                WARNING,
            )
        )
    if result.fin_count == 1:
        warnings.append(
            Violation(
                "fin_count",
                "A single fin is sufficient; a flat plate may be simpler",
                WARNING,
            )
        )
    return warnings


def errors(violations: List[Violation]) -> List[Violation]:
    return [v for v in violations if v.severity == ERROR]


def has_errors(violations: List[Violation]) -> bool:
    return bool(errors(violations))


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _suggest_key(bad_key: str) -> Optional[str]:
    allowed = ACCEPTED_KEYS + tuple(_ALIASES)
    close = difflib.get_close_matches(bad_key, allowed, n=1, cutoff=0.7)
    return close[0] if close else None


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field}: expected a number, got bool", field=field)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise InvalidInputError(f"{field}: expected a number, got {value!r}", field=field)


def thermal_input_from_mapping(data: Mapping[str, Any]) -> ThermalInput:
    """Build a ThermalInput from user data, filling defaults.

    Accepts snake_case field names or the camelCase keys of the web
    calculator. ``material`` takes a key or a display label such as
    "Aluminum 6061" and sets the emissivity unless one is given.
    """
    values: Dict[str, Any] = dict(design_defaults.DEFAULT_INPUTS)
    emissivity_given = False
    material_key: Optional[str] = None

    for raw_key, raw_value in data.items():
        key = _ALIASES.get(raw_key, raw_key)
        if key == "material":
            if raw_value is None:
                continue
            material = find_material(str(raw_value))
            if material is None:
                known = ", ".join(MATERIALS)
                raise InvalidInputError(
                    f"Unknown material {raw_value!r} (known: {known})", field="material"
                )
            material_key = material.key
            continue
        if key not in values:
            hint = _suggest_key(str(raw_key))
            msg = f"Unknown input field {raw_key!r}"
            if hint:
                msg += f"; did you mean {hint!r}?"
            raise InvalidInputError(msg, field=str(raw_key))
        if key == "convection_type":
            values[key] = raw_value
            continue
        if key == "air_velocity_m_s" and raw_value in (None, ""):
            values[key] = None
            continue
        if key == "emissivity":
            emissivity_given = True
        values[key] = _as_float(raw_value, key)

    if material_key is not None and not emissivity_given:
        values["emissivity"] = MATERIALS[material_key].emissivity

    return ThermalInput(**values)


def load_input_file(path: Path) -> Dict[str, Any]:
    """Read a JSON object of inputs."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, dict):
        raise InvalidInputError(
            f"Input file must contain a JSON object, got {type(raw).__name__}"
        )
    return raw
