"""Fin count vs power chart."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Tuple

try:
    from HeatsinkSizer.console import log
    from HeatsinkSizer.thermal_model import ThermalInput, generate_fin_count_curve
except ImportError:  # pragma: no cover
    from console import log  # type: ignore[no-redef]
    from thermal_model import ThermalInput, generate_fin_count_curve  # type: ignore[no-redef]


def plot_fin_count_curves(
    curves: Dict[str, List[Tuple[float, int]]],
    delta_t: Optional[float] = None,
    path: Optional[Path] = None,
    show: bool = False,
):
    """Draw one step line per convection mode; save to ``path`` when given."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots()
    for label, data in curves.items():
        powers = [p for p, _ in data]
        fins = [n for _, n in data]
        ax.step(powers, fins, where="post", marker="o", label=label)

    ax.set_xlabel("Power, W")
    ax.set_ylabel("Required fins")
    title = "Fin count vs power"
    if delta_t is not None:
        title += f" at ΔT = {delta_t:.1f} °C"
    ax.set_title(title)
    ax.grid(True)
    ax.legend()

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(path)
        log(f"Chart written to {path}")
    if show:
        plt.show()
    elif path is not None:
        plt.close(fig)
    return fig


def plot_for_inputs(inputs: ThermalInput, path: Optional[Path] = None, show: bool = False):
    curves = generate_fin_count_curve(inputs)
    delta_t = inputs.max_surface_temp_c - inputs.ambient_temp_c
    return plot_fin_count_curves(curves, delta_t=delta_t, path=path, show=show)
