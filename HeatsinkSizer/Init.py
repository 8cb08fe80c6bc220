"""FreeCAD console entry point for HeatsinkSizer workbench."""
from __future__ import annotations

import importlib.util
from dataclasses import dataclass
from typing import List

REQUIRED_LIBRARIES = ("numpy", "fluids")
OPTIONAL_LIBRARIES = ("matplotlib",)


@dataclass
class DependencyStatus:
    """Holds dependency availability information."""

    numpy_available: bool
    fluids_available: bool
    matplotlib_available: bool

    def warning_messages(self) -> List[str]:
        messages: List[str] = []
        for name in REQUIRED_LIBRARIES:
            if not getattr(self, f"{name}_available"):
                messages.append(
                    f"Library {name} is not installed. Install via pip: pip install {name}"
                )
        if not self.matplotlib_available:
            messages.append(
                "Library matplotlib is not installed; the fins-vs-power chart is disabled"
            )
        return messages


def dependency_status() -> DependencyStatus:
    """Return availability flags for the Python libraries the workbench uses."""
    found = {
        name: importlib.util.find_spec(name) is not None
        for name in REQUIRED_LIBRARIES + OPTIONAL_LIBRARIES
    }
    return DependencyStatus(
        numpy_available=found["numpy"],
        fluids_available=found["fluids"],
        matplotlib_available=found["matplotlib"],
    )


def Initialize() -> str:
    """Short message; FreeCAD calls this when the module is loaded (console)."""

    status = dependency_status()
    warnings = status.warning_messages()
    if warnings:
        return " | ".join(warnings)
    return "HeatsinkSizer initialized"


def FreeCADInit() -> None:  # pragma: no cover - entry point for FreeCAD
    """Entry point for FreeCAD (general initialization)."""
    Initialize()
