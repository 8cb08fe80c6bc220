from HeatsinkSizer.plotting import plot_fin_count_curves, plot_for_inputs


def test_plot_curves_to_file(tmp_path):
    curves = {"Natural": [(1.0, 1), (5.0, 3), (10.0, 7)], "Forced 2.0 m/s": [(1.0, 1), (10.0, 3)]}
    out = tmp_path / "chart.png"
    fig = plot_fin_count_curves(curves, delta_t=60.0, path=out)
    assert out.exists() and out.stat().st_size > 0
    assert "ΔT = 60.0" in fig.axes[0].get_title()
    assert len(fig.axes[0].get_lines()) == 2


def test_plot_for_inputs(tmp_path, scenario_a):
    out = tmp_path / "sub" / "fins.png"
    plot_for_inputs(scenario_a, path=out)
    assert out.exists()
