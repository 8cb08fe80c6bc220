import json
from dataclasses import replace

import pytest

from HeatsinkSizer.input_schema import (
    ERROR,
    WARNING,
    errors,
    has_errors,
    load_input_file,
    manufacturability_warnings,
    thermal_input_from_mapping,
    validate_inputs,
)
from HeatsinkSizer.thermal_model import (
    MATERIALS,
    ConvectionType,
    InvalidInputError,
    ThermalResult,
)


def _fields(violations, severity):
    return {v.field for v in violations if v.severity == severity}


def test_default_scenario_is_clean(scenario_a):
    assert validate_inputs(scenario_a) == []


def test_collects_every_error_at_once(scenario_a):
    bad = replace(
        scenario_a,
        max_surface_temp_c=20.0,
        power_w=0.0,
        length_mm=-5.0,
        emissivity=1.5,
    )
    violations = validate_inputs(bad)
    assert has_errors(violations)
    assert {"max_surface_temp_c", "power_w", "length_mm", "emissivity"} <= _fields(
        violations, ERROR
    )


def test_fin_height_must_be_positive(scenario_a):
    violations = validate_inputs(replace(scenario_a, height_mm=3.0))
    assert "height_mm" in _fields(violations, ERROR)


def test_forced_requires_velocity(scenario_a):
    forced = replace(scenario_a, convection_type=ConvectionType.FORCED)
    assert "air_velocity_m_s" in _fields(validate_inputs(forced), ERROR)
    zero = replace(forced, air_velocity_m_s=0.0)
    assert "air_velocity_m_s" in _fields(validate_inputs(zero), ERROR)
    assert validate_inputs(replace(forced, air_velocity_m_s=2.0)) == []


def test_advisory_warnings_do_not_block(scenario_a):
    odd = replace(
        scenario_a,
        fin_thickness_mm=1.0,
        emissivity=0.04,
        air_velocity_m_s=3.0,
        max_surface_temp_c=200.0,
    )
    violations = validate_inputs(odd)
    assert not has_errors(violations)
    assert {"fin_thickness_mm", "emissivity", "air_velocity_m_s", "max_surface_temp_c"} <= _fields(
        violations, WARNING
    )


def test_high_fan_velocity_warns(scenario_a):
    fast = replace(scenario_a, convection_type="forced", air_velocity_m_s=15.0)
    violations = validate_inputs(fast)
    assert errors(violations) == []
    assert "air_velocity_m_s" in _fields(violations, WARNING)


def test_manufacturability_warnings(scenario_a):
    tight = ThermalResult(width_mm=20.0, spacing_mm=2.5, fin_count=5)
    assert [v.field for v in manufacturability_warnings(scenario_a, tight)] == ["spacing_mm"]
    single = ThermalResult(width_mm=2.0, spacing_mm=4.8, fin_count=1)
    assert [v.field for v in manufacturability_warnings(scenario_a, single)] == ["fin_count"]


def test_mapping_uses_defaults():
    inputs = thermal_input_from_mapping({})
    assert inputs.ambient_temp_c == 25.0
    assert inputs.power_w == 10.0
    assert inputs.convection_type is ConvectionType.NATURAL
    assert inputs.air_velocity_m_s is None


def test_mapping_accepts_camel_case_and_strings():
    inputs = thermal_input_from_mapping(
        {"ambientTemp": "30", "power": " 12.5 ", "convectionType": "forced", "airVelocity": 1.5}
    )
    assert inputs.ambient_temp_c == 30.0
    assert inputs.power_w == 12.5
    assert inputs.convection_type is ConvectionType.FORCED
    assert inputs.air_velocity_m_s == 1.5


def test_material_sets_emissivity_unless_given():
    assert thermal_input_from_mapping({"material": "copper"}).emissivity == pytest.approx(0.04)
    explicit = thermal_input_from_mapping({"material": "copper", "emissivity": 0.9})
    assert explicit.emissivity == pytest.approx(0.9)


def test_unknown_key_suggests_close_match():
    with pytest.raises(InvalidInputError) as exc_info:
        thermal_input_from_mapping({"power_ww": 5})
    assert "did you mean 'power_w'" in exc_info.value.reason
    assert exc_info.value.field == "power_ww"


def test_unknown_material_rejected():
    with pytest.raises(InvalidInputError) as exc_info:
        thermal_input_from_mapping({"material": "wood"})
    assert exc_info.value.field == "material"


@pytest.mark.parametrize("value", ["abc", True, [1.0]])
def test_non_numeric_value_rejected(value):
    with pytest.raises(InvalidInputError) as exc_info:
        thermal_input_from_mapping({"length_mm": value})
    assert exc_info.value.field == "length_mm"


def test_load_input_file(tmp_path):
    path = tmp_path / "inputs.json"
    path.write_text(json.dumps({"power": 15}), encoding="utf-8")
    assert load_input_file(path) == {"power": 15}

    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        load_input_file(path)


def test_material_accepts_display_label():
    brass = thermal_input_from_mapping({"material": "Brass"})
    assert brass.emissivity == pytest.approx(MATERIALS["brass"].emissivity)
    steel = thermal_input_from_mapping({"material": " steel (carbon) "})
    assert steel.emissivity == pytest.approx(MATERIALS["steel_carbon"].emissivity)
