"""Thermal sizing engine for straight-fin heat sinks.

Natural or forced convection plus radiation, evaluated with closed-form
empirical correlations at a single steady-state operating point.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from fluids.core import Prandtl, Reynolds

KELVIN_OFFSET = 273.15

# Air properties at representative electronics operating conditions. They are
# held fixed for every calculation and are not derived from the film temperature.
GRAVITY = 9.81  # m/s^2
AIR_KINEMATIC_VISCOSITY = 1.568e-5  # m^2/s
AIR_THERMAL_DIFFUSIVITY = 2.2e-5  # m^2/s
AIR_THERMAL_CONDUCTIVITY = 0.0263  # W/(m*K)
STEFAN_BOLTZMANN = 5.67e-8  # W/(m^2*K^4)

# Correlation coefficients
SPACING_COEFF = 2.71
NATURAL_EXTERNAL_COEFF = 1.42
NATURAL_CHANNEL_COEFF = 1.31
FLAT_PLATE_COEFF = 0.664
DITTUS_BOELTER_COEFF = 0.023


class InvalidInputError(ValueError):
    """Raised when the inputs do not describe a physical operating point."""

    def __init__(self, reason: str, field: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.field = field


class ConvectionType(str, Enum):
    NATURAL = "natural"
    FORCED = "forced"


# ---------------------------------------------------------------------------
# Helper structures
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThermalInput:
    """Design targets and fixed geometry for one sizing run."""

    ambient_temp_c: float
    max_surface_temp_c: float
    power_w: float
    length_mm: float
    height_mm: float
    fin_thickness_mm: float
    base_thickness_mm: float
    emissivity: float
    convection_type: ConvectionType = ConvectionType.NATURAL
    air_velocity_m_s: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.convection_type, ConvectionType):
            try:
                mode = ConvectionType(str(self.convection_type).strip().lower())
            except ValueError:
                raise InvalidInputError(
                    f"Unknown convection type: {self.convection_type!r}",
                    field="convection_type",
                ) from None
            object.__setattr__(self, "convection_type", mode)

    def with_material(self, material: "Material") -> "ThermalInput":
        """Return a copy using the emissivity of ``material``."""
        return replace(self, emissivity=material.emissivity)

    @property
    def fin_height_mm(self) -> float:
        return self.height_mm - self.base_thickness_mm


@dataclass(frozen=True)
class ThermalResult:
    """Sized heat sink: width and spacing in mm (0.1 mm), fin count."""

    width_mm: float
    spacing_mm: float
    fin_count: int


@dataclass(frozen=True)
class ConvectionCoefficients:
    """External (h1) and inter-fin (h2) coefficients in W/(m^2*K)."""

    h1: float
    h2: float
    reynolds: Optional[float] = None
    prandtl: Optional[float] = None
    hydraulic_diameter_m: Optional[float] = None
    channel_reynolds: Optional[float] = None


@dataclass(frozen=True)
class ThermalBreakdown:
    """All intermediate values of one sizing run, plus its result."""

    delta_t: float
    surface_temp_k: float
    ambient_temp_k: float
    average_temp_k: float
    beta: float
    optimal_spacing_m: float
    coefficients: ConvectionCoefficients
    external_area_m2: float
    internal_area_m2: float
    radiation_area_m2: float
    external_convection_w: float
    external_radiation_w: float
    internal_convection_w: float
    internal_radiation_w: float
    result: ThermalResult

    @property
    def per_gap_w(self) -> float:
        return self.internal_convection_w + self.internal_radiation_w

    @property
    def total_dissipation_w(self) -> float:
        external = self.external_convection_w + self.external_radiation_w
        return external + (self.result.fin_count - 1) * self.per_gap_w


@dataclass(frozen=True)
class Material:
    """Heat sink material with the properties used by reports."""

    key: str
    label: str
    thermal_conductivity_w_mk: float
    emissivity: float
    density_kg_m3: float
    specific_heat_j_kgk: float


# ---------------------------------------------------------------------------
# Heat sink material library
# ---------------------------------------------------------------------------

MATERIALS: Dict[str, Material] = {
    "al_6061": Material(
        key="al_6061",
        label="Aluminum 6061",
        thermal_conductivity_w_mk=167.0,
        emissivity=0.82,
        density_kg_m3=2700.0,
        specific_heat_j_kgk=896.0,
    ),
    "al_1050": Material(
        key="al_1050",
        label="Aluminum 1050",
        thermal_conductivity_w_mk=229.0,
        emissivity=0.09,
        density_kg_m3=2705.0,
        specific_heat_j_kgk=904.0,
    ),
    "copper": Material(
        key="copper",
        label="Copper",
        thermal_conductivity_w_mk=401.0,
        emissivity=0.04,
        density_kg_m3=8960.0,
        specific_heat_j_kgk=385.0,
    ),
    "brass": Material(
        key="brass",
        label="Brass",
        thermal_conductivity_w_mk=109.0,
        emissivity=0.61,
        density_kg_m3=8530.0,
        specific_heat_j_kgk=380.0,
    ),
    "steel_carbon": Material(
        key="steel_carbon",
        label="Steel (Carbon)",
        thermal_conductivity_w_mk=45.0,
        emissivity=0.80,
        density_kg_m3=7850.0,
        specific_heat_j_kgk=490.0,
    ),
    "titanium": Material(
        key="titanium",
        label="Titanium",
        thermal_conductivity_w_mk=22.0,
        emissivity=0.63,
        density_kg_m3=4500.0,
        specific_heat_j_kgk=523.0,
    ),
}

# Anodised 6061 is the usual extruded heat sink alloy
DEFAULT_MATERIAL_KEY = "al_6061"


def find_material(name: Optional[str]) -> Optional[Material]:
    """Look a material up by key or by display label (case-insensitive)."""
    if not name:
        return None
    if name in MATERIALS:
        return MATERIALS[name]
    wanted = name.strip().casefold()
    for material in MATERIALS.values():
        if wanted in (material.key.casefold(), material.label.casefold()):
            return material
    return None


def get_material(key: Optional[str]) -> Material:
    """Return a Material object for given key or label, or the default one."""
    return find_material(key) or MATERIALS[DEFAULT_MATERIAL_KEY]


# ---------------------------------------------------------------------------
# Basic functions
# ---------------------------------------------------------------------------

def convert_mm_to_m(value_mm: float) -> float:
    """Convert millimeters to meters."""
    return value_mm / 1000.0


def round_to_tenth(value: float) -> float:
    """Round half-up to one decimal place."""
    return float(np.floor(value * 10.0 + 0.5) / 10.0)


_NUMERIC_FIELDS = (
    "ambient_temp_c",
    "max_surface_temp_c",
    "power_w",
    "length_mm",
    "height_mm",
    "fin_thickness_mm",
    "base_thickness_mm",
    "emissivity",
    "air_velocity_m_s",
)


def _require(condition: bool, reason: str, field: str) -> None:
    if not condition:
        raise InvalidInputError(reason, field=field)


def check_inputs(inputs: ThermalInput) -> None:
    """Reject inputs that would make the correlations undefined."""
    for name in _NUMERIC_FIELDS:
        value = getattr(inputs, name)
        if value is not None:
            _require(math.isfinite(value), f"{name} must be a finite number", name)
    _require(
        inputs.max_surface_temp_c > inputs.ambient_temp_c,
        "Max surface temperature must be above ambient temperature",
        "max_surface_temp_c",
    )
    _require(inputs.power_w > 0, "Power must be positive", "power_w")
    for name in ("length_mm", "height_mm", "fin_thickness_mm", "base_thickness_mm"):
        _require(getattr(inputs, name) > 0, f"{name} must be positive", name)
    _require(
        inputs.height_mm > inputs.base_thickness_mm,
        "Height must exceed base thickness",
        "height_mm",
    )
    _require(
        0.0 <= inputs.emissivity <= 1.0,
        "Emissivity must be between 0 and 1",
        "emissivity",
    )
    if inputs.convection_type is ConvectionType.FORCED:
        _require(
            inputs.air_velocity_m_s is not None and inputs.air_velocity_m_s > 0,
            "Forced convection requires a positive air velocity",
            "air_velocity_m_s",
        )


def optimal_fin_spacing(delta_t: float, average_temp_k: float, length_m: float) -> float:
    """Optimal fin gap in metres from the vertical-channel correlation."""
    beta = 1.0 / average_temp_k
    group = (GRAVITY * beta * delta_t) / (
        length_m * AIR_THERMAL_DIFFUSIVITY * AIR_KINEMATIC_VISCOSITY
    )
    return SPACING_COEFF * group ** -0.25


def convection_coefficients_natural(
    delta_t: float, length_m: float, spacing_m: float
) -> ConvectionCoefficients:
    h1 = NATURAL_EXTERNAL_COEFF * (delta_t / length_m) ** 0.25
    h2 = NATURAL_CHANNEL_COEFF * AIR_THERMAL_CONDUCTIVITY / spacing_m
    return ConvectionCoefficients(h1=h1, h2=h2)


def convection_coefficients_forced(
    velocity_m_s: float, length_m: float, height_m: float, spacing_m: float
) -> ConvectionCoefficients:
    """Laminar flat plate outside, Dittus-Boelter inside the fin channels."""
    k = AIR_THERMAL_CONDUCTIVITY
    re = Reynolds(V=velocity_m_s, D=length_m, nu=AIR_KINEMATIC_VISCOSITY)
    pr = Prandtl(nu=AIR_KINEMATIC_VISCOSITY, alpha=AIR_THERMAL_DIFFUSIVITY)
    h1 = (k / length_m) * FLAT_PLATE_COEFF * re ** 0.5 * pr ** 0.33

    d_h = 4.0 * spacing_m * height_m / (2.0 * (spacing_m + height_m))
    re_channel = Reynolds(V=velocity_m_s, D=d_h, nu=AIR_KINEMATIC_VISCOSITY)
    h2 = (k / d_h) * DITTUS_BOELTER_COEFF * re_channel ** 0.8 * pr ** 0.4
    return ConvectionCoefficients(
        h1=h1,
        h2=h2,
        reynolds=re,
        prandtl=pr,
        hydraulic_diameter_m=d_h,
        channel_reynolds=re_channel,
    )


def _convection_coefficients(
    inputs: ThermalInput, length_m: float, height_m: float, spacing_m: float, delta_t: float
) -> ConvectionCoefficients:
    if inputs.convection_type is ConvectionType.FORCED:
        return convection_coefficients_forced(
            float(inputs.air_velocity_m_s), length_m, height_m, spacing_m
        )
    return convection_coefficients_natural(delta_t, length_m, spacing_m)


# ---------------------------------------------------------------------------
# Main sizing model
# ---------------------------------------------------------------------------

def compute_breakdown(inputs: ThermalInput) -> ThermalBreakdown:
    """Size the heat sink and keep every intermediate value.

    One fin always contributes the two external faces (A1 terms); each of
    the remaining ``fin_count - 1`` gaps adds Qc2 + Qr2.
    """
    check_inputs(inputs)

    delta_t = inputs.max_surface_temp_c - inputs.ambient_temp_c
    ts = inputs.max_surface_temp_c + KELVIN_OFFSET
    tamb = inputs.ambient_temp_c + KELVIN_OFFSET
    tavg = (ts + tamb) / 2.0

    L = convert_mm_to_m(inputs.length_mm)
    H = convert_mm_to_m(inputs.height_mm)
    t = convert_mm_to_m(inputs.fin_thickness_mm)
    b = convert_mm_to_m(inputs.base_thickness_mm)

    try:
        sopt = optimal_fin_spacing(delta_t, tavg, L)
        coeffs = _convection_coefficients(inputs, L, H, sopt, delta_t)

        a1 = H * L + t * (2 * H + L)
        a2 = L * (2 * (H - b) + sopt) + 2 * (t * H + sopt * b) + t * L
        ar2 = L * (t + sopt) + 2 * (t * H + sopt * b)

        radiant = STEFAN_BOLTZMANN * (ts ** 4 - tamb ** 4)
        qc1 = 2 * coeffs.h1 * a1 * delta_t
        qr1 = 2 * inputs.emissivity * a1 * radiant
        qc2 = coeffs.h2 * a2 * delta_t
        qr2 = inputs.emissivity * ar2 * radiant
    except (OverflowError, ZeroDivisionError) as exc:
        raise InvalidInputError(f"Heat transfer terms are out of range: {exc}") from exc

    per_gap = qc2 + qr2
    if not np.isfinite([sopt, coeffs.h1, coeffs.h2, qc1, qr1, per_gap]).all():
        raise InvalidInputError("Heat transfer terms are not finite for these inputs")
    if per_gap <= 0:
        raise InvalidInputError("Fin gaps dissipate no heat; fin count is undefined")

    fin_count = max(1, math.ceil(1 + (inputs.power_w - qr1 - qc1) / per_gap))
    spacing_mm = sopt * 1000.0
    width_mm = (fin_count - 1) * spacing_mm + fin_count * inputs.fin_thickness_mm

    result = ThermalResult(
        width_mm=round_to_tenth(width_mm),
        spacing_mm=round_to_tenth(spacing_mm),
        fin_count=int(fin_count),
    )
    return ThermalBreakdown(
        delta_t=delta_t,
        surface_temp_k=ts,
        ambient_temp_k=tamb,
        average_temp_k=tavg,
        beta=1.0 / tavg,
        optimal_spacing_m=sopt,
        coefficients=coeffs,
        external_area_m2=a1,
        internal_area_m2=a2,
        radiation_area_m2=ar2,
        external_convection_w=qc1,
        external_radiation_w=qr1,
        internal_convection_w=qc2,
        internal_radiation_w=qr2,
        result=result,
    )


def compute(inputs: ThermalInput) -> ThermalResult:
    """Return width, optimal spacing and fin count for ``inputs``."""
    return compute_breakdown(inputs).result


def generate_fin_count_curve(
    inputs: ThermalInput,
    powers: Optional[Sequence[float]] = None,
    velocities: Optional[Sequence[float]] = None,
) -> Dict[str, List[Tuple[float, int]]]:
    """Fin count vs dissipated power, natural and for several air velocities."""
    if powers is None:
        powers = np.linspace(1.0, 2.0 * max(inputs.power_w, 1.0), 12)
    if velocities is None:
        if inputs.air_velocity_m_s:
            velocities = (inputs.air_velocity_m_s,)
        else:
            velocities = (1.0, 2.0, 4.0)

    modes: List[Tuple[str, ThermalInput]] = [
        ("Natural", replace(inputs, convection_type=ConvectionType.NATURAL)),
    ]
    for v in velocities:
        modes.append(
            (
                f"Forced {v:.1f} m/s",
                replace(inputs, convection_type=ConvectionType.FORCED, air_velocity_m_s=float(v)),
            )
        )

    curves: Dict[str, List[Tuple[float, int]]] = {}
    for label, base in modes:
        data: List[Tuple[float, int]] = []
        for p in powers:
            result = compute(replace(base, power_w=float(p)))
            data.append((float(p), result.fin_count))
        curves[label] = data
    return curves
