import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless chart rendering
os.environ.setdefault("MPLBACKEND", "Agg")


# Provide lightweight FreeCAD stubs so modules import without the GUI runtime
if "FreeCADGui" not in sys.modules:
    class _DummyWorkbench:
        def __init__(self, *args, **kwargs):
            pass

        def appendToolbar(self, *args, **kwargs):
            pass

        def appendMenu(self, *args, **kwargs):
            pass

    def _noop(*args, **kwargs):
        return None

    sys.modules["FreeCADGui"] = SimpleNamespace(
        Workbench=_DummyWorkbench,
        addCommand=_noop,
        addWorkbench=_noop,
        doCommand=_noop,
    )


@pytest.fixture
def scenario_a():
    from HeatsinkSizer.thermal_model import ThermalInput

    return ThermalInput(
        ambient_temp_c=25.0,
        max_surface_temp_c=85.0,
        power_w=10.0,
        length_mm=50.0,
        height_mm=25.0,
        fin_thickness_mm=2.0,
        base_thickness_mm=3.0,
        emissivity=0.82,
        convection_type="natural",
    )
