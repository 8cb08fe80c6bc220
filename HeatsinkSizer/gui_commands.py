"""FreeCAD GUI commands for HeatsinkSizer Workbench."""
from __future__ import annotations

import importlib.util
import sys
from importlib import import_module
from pathlib import Path
from typing import Protocol

PACKAGE_NAME = "HeatsinkSizer"


class _Command(Protocol):
    """Protocol for FreeCAD command objects."""

    def GetResources(self) -> dict:  # noqa: N802
        ...

    def Activated(self):  # noqa: N802
        ...

    def IsActive(self) -> bool:  # noqa: N802
        ...


def _load_gui_module():
    """Return FreeCADGui module when available."""
    try:
        return import_module("FreeCADGui")
    except Exception as exc:  # pragma: no cover - GUI only
        raise ImportError("FreeCADGui module is not available") from exc


def _load_qt_widgets():
    """Return QtWidgets module from PySide6/PySide2."""
    for candidate in ("PySide6", "PySide2"):
        try:
            return import_module(f"{candidate}.QtWidgets")
        except ImportError:
            continue
    raise ImportError("Neither PySide6 nor PySide2 is available for GUI")


def _build_placeholder_panel(title: str, description: str):
    """Simple QWidget placeholder when TaskPanel cannot be loaded."""

    QtWidgets = _load_qt_widgets()

    widget = QtWidgets.QWidget()
    layout = QtWidgets.QVBoxLayout(widget)

    header = QtWidgets.QLabel(f"<b>{title}</b>")
    header.setWordWrap(True)
    layout.addWidget(header)

    hint = QtWidgets.QLabel(description)
    hint.setWordWrap(True)
    layout.addWidget(hint)

    layout.addStretch(1)
    return widget


def _load_neighbor_module(module_name: str):
    """Load ``<module_name>.py`` from this file's folder and register it."""
    path = Path(__file__).resolve().parent / f"{module_name}.py"
    if not path.is_file():
        raise ImportError(f"{path} not found")
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        raise
    return module


def _import_taskpanel(module_name: str, class_name: str):
    """Load a TaskPanel class however the workbench was installed.

    Order: relative to this package, ``HeatsinkSizer.<module_name>``,
    top-level ``<module_name>``, then the file next to this one.
    On failure print to the FreeCAD console and return None.
    """
    last_exc: Exception | None = None

    attempts = []
    if __package__:
        attempts.append((f".{module_name}", __package__))
    attempts.append((f"{PACKAGE_NAME}.{module_name}", None))
    attempts.append((module_name, None))

    for name, package in attempts:
        try:
            module = import_module(name, package)
            return getattr(module, class_name)
        except Exception as exc:
            last_exc = exc

    try:
        return getattr(_load_neighbor_module(module_name), class_name)
    except Exception as exc:
        last_exc = exc

    try:
        import FreeCAD as App  # type: ignore[import]

        App.Console.PrintError(f"HeatsinkSizer: Cannot import {class_name}: {last_exc}\n")
    except Exception:
        pass
    return None


class _BaseCommand:
    """Base class for GUI commands."""

    def __init__(self, name: str, tooltip: str) -> None:
        self._name = name
        self._tooltip = tooltip

    def GetResources(self) -> dict:  # noqa: N802
        return {"MenuText": self._name, "ToolTip": self._tooltip}

    def IsActive(self) -> bool:  # noqa: N802
        try:
            _load_gui_module()
        except ImportError:
            return False
        return True


class SizeHeatsinkCommand(_BaseCommand):
    """Open the thermal sizing task panel."""

    def __init__(self) -> None:
        super().__init__(
            name="Size Heatsink",
            tooltip="Compute fin count, spacing and width from thermal targets",
        )

    def Activated(self):  # noqa: N802
        Gui = _load_gui_module()
        PanelClass = _import_taskpanel("gui_sizing_mode", "SizingTaskPanel")

        if PanelClass is None:
            panel = _build_placeholder_panel(
                "Heatsink sizing",
                "Failed to load GUI (SizingTaskPanel).\n"
                "Check gui_sizing_mode.py and the HeatsinkSizer installation.",
            )
        else:
            panel = PanelClass()

        Gui.Control.showDialog(panel)


COMMANDS: dict[str, _Command] = {
    "HSS_SizeHeatsink": SizeHeatsinkCommand(),
}
