"""Fin layout for a sized heat sink and its FreeCAD solid."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

# Try absolute imports first (as a package), then fallback to local modules
try:
    from HeatsinkSizer.console import log, log_err
    from HeatsinkSizer.thermal_model import ThermalInput, ThermalResult
except ImportError:  # pragma: no cover
    from console import log, log_err  # type: ignore[no-redef]
    from thermal_model import ThermalInput, ThermalResult  # type: ignore[no-redef]


# ---------------------------------------------------------------------------
# Analytical layout
# ---------------------------------------------------------------------------

@dataclass
class FinLayout:
    """Straight-fin heat sink envelope and fin positions in millimeters.

    X runs across the width starting at the left edge of the base,
    Y along the fins (length), Z up from the bottom of the base.
    """

    length_mm: float
    width_mm: float
    height_mm: float
    base_thickness_mm: float
    fin_thickness_mm: float
    spacing_mm: float
    fin_count: int
    fin_centers_mm: List[float] = field(default_factory=list)

    @property
    def fin_height_mm(self) -> float:
        return self.height_mm - self.base_thickness_mm

    @property
    def pitch_mm(self) -> float:
        return self.fin_thickness_mm + self.spacing_mm

    @property
    def volume_cm3(self) -> float:
        """Bounding envelope volume."""
        return self.length_mm * self.width_mm * self.height_mm / 1000.0


def fin_centers(fin_count: int, fin_thickness_mm: float, spacing_mm: float) -> List[float]:
    """X coordinate of each fin centre, each fin centred in its slot."""
    pitch = fin_thickness_mm + spacing_mm
    return [i * pitch + fin_thickness_mm / 2.0 for i in range(fin_count)]


def build_fin_layout(inputs: ThermalInput, result: ThermalResult) -> FinLayout:
    if result.fin_count < 1:
        raise ValueError("fin_count must be at least 1")
    return FinLayout(
        length_mm=inputs.length_mm,
        width_mm=result.width_mm,
        height_mm=inputs.height_mm,
        base_thickness_mm=inputs.base_thickness_mm,
        fin_thickness_mm=inputs.fin_thickness_mm,
        spacing_mm=result.spacing_mm,
        fin_count=result.fin_count,
        fin_centers_mm=fin_centers(
            result.fin_count, inputs.fin_thickness_mm, result.spacing_mm
        ),
    )


# ---------------------------------------------------------------------------
# 3D geometry in FreeCAD
# ---------------------------------------------------------------------------

def _refine_shape(shape):
    """Merge coplanar splitter faces where possible."""
    try:
        refined = shape.removeSplitter()
        if hasattr(refined, "isNull") and not refined.isNull():
            return refined
    except Exception as exc:
        log_err(f" _refine_shape: removeSplitter failed: {exc}")
    return shape


def _add_reference_properties(obj, layout: FinLayout) -> None:
    props = (
        ("FinCount", "App::PropertyInteger", layout.fin_count, "Number of fins"),
        ("FinSpacing", "App::PropertyFloat", layout.spacing_mm, "Fin gap (mm)"),
        ("FinThickness", "App::PropertyFloat", layout.fin_thickness_mm, "Fin thickness (mm)"),
        ("HeatsinkWidth", "App::PropertyFloat", layout.width_mm, "Overall width (mm)"),
        ("BaseThickness", "App::PropertyFloat", layout.base_thickness_mm, "Base thickness (mm)"),
    )
    for name, kind, value, doc in props:
        try:
            obj.addProperty(kind, name, "Heatsink", doc)
            setattr(obj, name, value)
        except Exception as exc:
            log_err(f" create_heatsink_solid: property {name} failed: {exc}")


def create_heatsink_solid(layout: FinLayout, doc=None, name: str = "Heatsink_Finned"):
    """Create the finned heat sink as a Part::Feature.

    Fins start exactly at the top of the base and run the full length.
    """
    try:
        import FreeCAD as App  # type: ignore
        import Part  # type: ignore
    except Exception as exc:  # pragma: no cover
        raise RuntimeError(
            "3D geometry creation is only available inside FreeCAD"
        ) from exc

    if doc is None:
        doc = App.ActiveDocument or App.newDocument("HeatsinkSizer")

    log(
        "create_heatsink_solid: "
        f"W={layout.width_mm:.1f} L={layout.length_mm:.1f} H={layout.height_mm:.1f}, "
        f"fins={layout.fin_count}, gap={layout.spacing_mm:.1f}"
    )

    base = Part.makeBox(layout.width_mm, layout.length_mm, layout.base_thickness_mm)
    solid = base
    if layout.fin_height_mm > 0:
        for x_center in layout.fin_centers_mm:
            x0 = x_center - layout.fin_thickness_mm / 2.0
            fin = Part.makeBox(
                layout.fin_thickness_mm,
                layout.length_mm,
                layout.fin_height_mm,
                App.Vector(x0, 0.0, layout.base_thickness_mm),
            )
            solid = solid.fuse(fin)
    solid = _refine_shape(solid)

    obj = doc.addObject("Part::Feature", name)
    obj.Label = name
    obj.Shape = solid
    _add_reference_properties(obj, layout)
    doc.recompute()
    log(
        "create_heatsink_solid: document recomputed; "
        f"Volume={getattr(obj.Shape, 'Volume', 'N/A')}"
    )
    return obj
