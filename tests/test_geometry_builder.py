import pytest

from HeatsinkSizer.geometry_builder import build_fin_layout, create_heatsink_solid, fin_centers
from HeatsinkSizer.thermal_model import ThermalResult, compute


def test_fin_centers_start_at_left_edge():
    centers = fin_centers(3, 2.0, 4.8)
    assert centers == pytest.approx([1.0, 7.8, 14.6])


def test_layout_matches_result(scenario_a):
    result = compute(scenario_a)
    layout = build_fin_layout(scenario_a, result)
    assert layout.fin_count == result.fin_count == len(layout.fin_centers_mm)
    assert layout.fin_height_mm == pytest.approx(22.0)
    assert layout.pitch_mm == pytest.approx(6.8)
    # the last fin ends at the overall width, up to spacing rounding
    last_edge = layout.fin_centers_mm[-1] + layout.fin_thickness_mm / 2.0
    assert last_edge == pytest.approx(layout.width_mm, abs=0.05 * layout.fin_count)


def test_layout_volume(scenario_a):
    layout = build_fin_layout(scenario_a, ThermalResult(width_mm=10.0, spacing_mm=4.0, fin_count=2))
    assert layout.volume_cm3 == pytest.approx(50.0 * 10.0 * 25.0 / 1000.0)


def test_layout_rejects_empty_result(scenario_a):
    with pytest.raises(ValueError):
        build_fin_layout(scenario_a, ThermalResult(width_mm=0.0, spacing_mm=4.0, fin_count=0))


def test_solid_requires_freecad(scenario_a):
    layout = build_fin_layout(scenario_a, compute(scenario_a))
    with pytest.raises(RuntimeError):
        create_heatsink_solid(layout)
