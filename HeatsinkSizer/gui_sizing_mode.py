"""Task panel for thermal sizing of a straight-fin heat sink."""
from __future__ import annotations

from typing import Dict, List, Optional

# ---- workbench module imports ---------------------------------------------
try:
    from HeatsinkSizer.console import log, log_err
    from HeatsinkSizer.design_defaults import DEFAULT_INPUTS
    from HeatsinkSizer.export import default_export_name, write_cad_json, write_csv_report
    from HeatsinkSizer.geometry_builder import build_fin_layout, create_heatsink_solid
    from HeatsinkSizer.input_schema import (
        PARAMETERS_BY_NAME,
        Violation,
        errors,
        manufacturability_warnings,
        validate_inputs,
    )
    from HeatsinkSizer.thermal_model import (
        DEFAULT_MATERIAL_KEY,
        MATERIALS,
        ConvectionType,
        InvalidInputError,
        ThermalBreakdown,
        ThermalInput,
        compute_breakdown,
    )
except ImportError:  # pragma: no cover
    from console import log, log_err  # type: ignore[no-redef]
    from design_defaults import DEFAULT_INPUTS  # type: ignore[no-redef]
    from export import (  # type: ignore[no-redef]
        default_export_name,
        write_cad_json,
        write_csv_report,
    )
    from geometry_builder import (  # type: ignore[no-redef]
        build_fin_layout,
        create_heatsink_solid,
    )
    from input_schema import (  # type: ignore[no-redef]
        PARAMETERS_BY_NAME,
        Violation,
        errors,
        manufacturability_warnings,
        validate_inputs,
    )
    from thermal_model import (  # type: ignore[no-redef]
        DEFAULT_MATERIAL_KEY,
        MATERIALS,
        ConvectionType,
        InvalidInputError,
        ThermalBreakdown,
        ThermalInput,
        compute_breakdown,
    )


# field -> (label, decimals, step)
SPIN_FIELDS: Dict[str, tuple] = {
    "ambient_temp_c": ("T_amb:", 1, 1.0),
    "max_surface_temp_c": ("T_s max:", 1, 1.0),
    "power_w": ("Power:", 2, 0.5),
    "length_mm": ("Length L:", 2, 0.1),
    "height_mm": ("Height H:", 2, 0.1),
    "fin_thickness_mm": ("Fin thickness:", 2, 0.1),
    "base_thickness_mm": ("Base thickness:", 2, 0.1),
    "emissivity": ("Emissivity:", 2, 0.01),
    "air_velocity_m_s": ("Air velocity:", 2, 0.1),
}

# spin-box ceiling where the schema has no upper bound
_SPIN_MAX = 1e6
_SPIN_MIN_STEP = 0.01


def format_result_text(
    inputs: Optional[ThermalInput],
    breakdown: Optional[ThermalBreakdown],
    violations: List[Violation],
) -> str:
    """Text for the result label: errors, or results followed by warnings."""
    blocking = errors(violations)
    if blocking or breakdown is None or inputs is None:
        lines = ["Cannot size the heat sink:"]
        lines += [f"  • {v.message}" for v in blocking]
        return "\n".join(lines)

    result = breakdown.result
    lines = [
        f"Mode: {inputs.convection_type.value} convection",
        f"Heat sink width ≈ {result.width_mm:.1f} mm",
        f"Fin spacing ≈ {result.spacing_mm:.1f} mm",
        f"Number of fins: {result.fin_count}",
        f"Dissipation at T_s max ≈ {breakdown.total_dissipation_w:.1f} W "
        f"(required {inputs.power_w:.1f} W)",
    ]
    warnings = [v for v in violations if v not in blocking]
    if warnings:
        lines.append("Warnings:")
        lines += [f"  • {v.message}" for v in warnings]
    return "\n".join(lines)


# ---------- Qt Task Panel implementation ------------------------------------


def _load_qt_widgets():
    """Return QtWidgets module from PySide6/PySide2."""
    for name in ("PySide6", "PySide2"):
        try:
            module = __import__(name + ".QtWidgets", fromlist=["QtWidgets"])
            return module
        except ImportError:
            continue
    raise ImportError("Neither PySide6 nor PySide2 is available")


def _load_plot_for_inputs():
    try:
        from HeatsinkSizer.plotting import plot_for_inputs
    except ImportError:
        from plotting import plot_for_inputs  # type: ignore[no-redef]
    return plot_for_inputs


class SizingTaskPanel:
    """Qt Task Panel: thermal targets in, fin count/spacing/width out."""

    def __init__(self) -> None:
        QtWidgets = _load_qt_widgets()
        self._QtWidgets = QtWidgets

        self.form = QtWidgets.QWidget()
        self._spins: Dict[str, object] = {}
        self._inputs: Optional[ThermalInput] = None
        self._breakdown: Optional[ThermalBreakdown] = None
        self._build_ui()

    # ------------------------------------------------------------------ UI ---
    def _make_spin(self, field: str):
        QtWidgets = self._QtWidgets
        _, decimals, step = SPIN_FIELDS[field]
        spec = PARAMETERS_BY_NAME[field]

        spin = QtWidgets.QDoubleSpinBox()
        low = spec.min_value if spec.min_value is not None else -_SPIN_MAX
        if not spec.inclusive_min:
            low += _SPIN_MIN_STEP
        spin.setRange(low, spec.max_value if spec.max_value is not None else _SPIN_MAX)
        spin.setDecimals(decimals)
        spin.setSingleStep(step)
        if spec.unit:
            spin.setSuffix(f" {spec.unit}")
        spin.setToolTip(spec.description)
        default = DEFAULT_INPUTS.get(field)
        spin.setValue(float(default) if default is not None else 2.0)
        self._spins[field] = spin
        return spin

    def _build_ui(self) -> None:
        QtWidgets = self._QtWidgets

        layout = QtWidgets.QVBoxLayout(self.form)

        header = QtWidgets.QLabel("<b>Heatsink sizing</b>")
        header.setWordWrap(True)
        layout.addWidget(header)

        hint = QtWidgets.QLabel(
            "Enter thermal targets and fixed geometry. Fin spacing, fin count and\n"
            "width are recalculated automatically; the button builds a 3D model."
        )
        hint.setWordWrap(True)
        layout.addWidget(hint)

        therm_group = QtWidgets.QGroupBox("Thermal targets")
        therm_layout = QtWidgets.QFormLayout(therm_group)
        for field in ("ambient_temp_c", "max_surface_temp_c", "power_w"):
            therm_layout.addRow(SPIN_FIELDS[field][0], self._make_spin(field))
        layout.addWidget(therm_group)

        dims_group = QtWidgets.QGroupBox("Geometry (mm)")
        dims_layout = QtWidgets.QFormLayout(dims_group)
        for field in ("length_mm", "height_mm", "fin_thickness_mm", "base_thickness_mm"):
            dims_layout.addRow(SPIN_FIELDS[field][0], self._make_spin(field))
        layout.addWidget(dims_group)

        surf_group = QtWidgets.QGroupBox("Material and cooling")
        self.surf_layout = QtWidgets.QFormLayout(surf_group)

        self.material_combo = QtWidgets.QComboBox()
        self._material_keys = list(MATERIALS.keys())
        for key in self._material_keys:
            mat = MATERIALS[key]
            self.material_combo.addItem(
                f"{mat.label} (k={mat.thermal_conductivity_w_mk:g} W/m·K)", userData=key
            )
        self.material_combo.setCurrentIndex(self._material_keys.index(DEFAULT_MATERIAL_KEY))
        self.surf_layout.addRow("Material:", self.material_combo)
        self.surf_layout.addRow(SPIN_FIELDS["emissivity"][0], self._make_spin("emissivity"))

        self.convection_combo = QtWidgets.QComboBox()
        self.convection_combo.addItem("Natural convection", userData=ConvectionType.NATURAL.value)
        self.convection_combo.addItem("Forced convection (fan)", userData=ConvectionType.FORCED.value)
        self.surf_layout.addRow("Cooling:", self.convection_combo)

        self.velocity_label = QtWidgets.QLabel(SPIN_FIELDS["air_velocity_m_s"][0])
        self.surf_layout.addRow(self.velocity_label, self._make_spin("air_velocity_m_s"))
        layout.addWidget(surf_group)

        self.result_label = QtWidgets.QLabel("Result has not been computed yet.")
        self.result_label.setWordWrap(True)
        layout.addWidget(self.result_label)

        btn_row = QtWidgets.QHBoxLayout()
        self.btn_generate = QtWidgets.QPushButton("Build 3D model")
        self.btn_csv = QtWidgets.QPushButton("Export CSV")
        self.btn_cad = QtWidgets.QPushButton("Export CAD JSON")
        self.btn_chart = QtWidgets.QPushButton("Fins vs power chart")
        self.btn_generate.clicked.connect(self._on_generate_clicked)
        self.btn_csv.clicked.connect(self._on_export_csv_clicked)
        self.btn_cad.clicked.connect(self._on_export_cad_clicked)
        self.btn_chart.clicked.connect(self._on_chart_clicked)
        for btn in (self.btn_generate, self.btn_csv, self.btn_cad, self.btn_chart):
            btn_row.addWidget(btn)
        layout.addLayout(btn_row)

        layout.addStretch(1)

        # Auto recalculation
        for spin in self._spins.values():
            spin.valueChanged.connect(self._update_result_label)
        self.material_combo.currentIndexChanged.connect(self._on_material_changed)
        self.convection_combo.currentIndexChanged.connect(self._on_convection_changed)

        self._on_convection_changed(self.convection_combo.currentIndex())

    # ----------------------------------------------------------- helpers -----
    def _current_material(self):
        key = self.material_combo.currentData() or DEFAULT_MATERIAL_KEY
        return MATERIALS.get(key, MATERIALS[DEFAULT_MATERIAL_KEY])

    def _forced(self) -> bool:
        return self.convection_combo.currentData() == ConvectionType.FORCED.value

    def _on_material_changed(self, index: int) -> None:
        # emissivity follows the material; the user may still edit it
        self._spins["emissivity"].setValue(self._current_material().emissivity)
        self._update_result_label()

    def _on_convection_changed(self, index: int) -> None:
        forced = self._forced()
        self.velocity_label.setVisible(forced)
        self._spins["air_velocity_m_s"].setVisible(forced)
        self._update_result_label()

    def _read_inputs(self) -> ThermalInput:
        values = {field: float(spin.value()) for field, spin in self._spins.items()}
        forced = self._forced()
        values["convection_type"] = ConvectionType.FORCED if forced else ConvectionType.NATURAL
        if not forced:
            values["air_velocity_m_s"] = None
        return ThermalInput(**values)

    # ----------------------------------------------------- core computation ---
    def _recompute(self) -> str:
        self._inputs = None
        self._breakdown = None
        inputs = self._read_inputs()
        violations = validate_inputs(inputs)
        if errors(violations):
            return format_result_text(inputs, None, violations)
        try:
            breakdown = compute_breakdown(inputs)
        except InvalidInputError as exc:
            return format_result_text(
                inputs, None, [Violation(exc.field or "inputs", exc.reason)]
            )
        violations += manufacturability_warnings(inputs, breakdown.result)
        self._inputs = inputs
        self._breakdown = breakdown
        return format_result_text(inputs, breakdown, violations)

    def _update_result_label(self, *args) -> None:
        self.result_label.setText(self._recompute())

    def _require_result(self) -> bool:
        self._update_result_label()
        if self._breakdown is None:
            self._QtWidgets.QMessageBox.critical(
                self.form,
                "HeatsinkSizer",
                "Fix the input errors before continuing.",
            )
            return False
        return True

    # ----------------------------------------------------- 3D + export -------
    def _on_generate_clicked(self) -> None:
        QtWidgets = self._QtWidgets
        if not self._require_result():
            return

        layout = build_fin_layout(self._inputs, self._breakdown.result)
        try:
            import FreeCAD as App  # type: ignore[import]
        except ImportError:
            QtWidgets.QMessageBox.critical(
                self.form,
                "HeatsinkSizer",
                "FreeCAD is not available for 3D model construction",
            )
            return

        try:
            obj = create_heatsink_solid(layout, doc=App.ActiveDocument)
        except Exception as exc:  # pragma: no cover - GUI only
            log_err(f"3D model construction failed: {exc}")
            QtWidgets.QMessageBox.critical(
                self.form,
                "HeatsinkSizer",
                f"3D model construction error:\n{exc}",
            )
            return

        log(f"Created heatsink: {obj.Name} ({obj.Label})")

    def _ask_save_path(self, kind: str, file_filter: str) -> Optional[str]:
        path, _ = self._QtWidgets.QFileDialog.getSaveFileName(
            self.form, "Export", default_export_name(kind), file_filter
        )
        return path or None

    def _on_export_csv_clicked(self) -> None:
        if not self._require_result():
            return
        path = self._ask_save_path("csv", "CSV files (*.csv)")
        if path is None:
            return
        try:
            write_csv_report(
                path, self._inputs, self._breakdown, material=self._current_material()
            )
        except OSError as exc:
            self._QtWidgets.QMessageBox.critical(self.form, "HeatsinkSizer", str(exc))

    def _on_export_cad_clicked(self) -> None:
        if not self._require_result():
            return
        path = self._ask_save_path("cad", "JSON files (*.json)")
        if path is None:
            return
        try:
            write_cad_json(
                path, self._inputs, self._breakdown.result, material=self._current_material()
            )
        except OSError as exc:
            self._QtWidgets.QMessageBox.critical(self.form, "HeatsinkSizer", str(exc))

    # ----------------------------------------------------- fins(P) chart -----
    def _on_chart_clicked(self) -> None:
        """Plot required fins vs power, natural and forced."""
        QtWidgets = self._QtWidgets
        if not self._require_result():
            return

        try:
            plot_for_inputs = _load_plot_for_inputs()
        except ImportError as exc:
            QtWidgets.QMessageBox.critical(
                self.form, "HeatsinkSizer", f"Cannot load plotting module: {exc}"
            )
            return

        try:
            plot_for_inputs(self._inputs, show=True)
        except ImportError:
            QtWidgets.QMessageBox.critical(
                self.form,
                "HeatsinkSizer",
                "matplotlib library is not installed",
            )
