"""GUI workbench registration for HeatsinkSizer."""
from __future__ import annotations

import os
from pathlib import Path

import FreeCADGui as Gui  # FreeCAD GUI API


def _module_dir() -> Path:
    """Return the folder containing this module.

    Prefers ``__file__`` (normal runtime) and falls back to ``__spec__`` so
    tests can import the module without a filesystem-backed ``__file__``.
    """

    if "__file__" in globals():
        return Path(__file__).parent
    spec = globals().get("__spec__")
    if spec and getattr(spec, "origin", None):
        return Path(spec.origin).parent
    return Path(os.getcwd())


class HeatsinkSizerWorkbench(Gui.Workbench):
    """FreeCAD GUI workbench for thermal sizing of finned heat sinks."""

    MenuText = "HeatsinkSizer"
    ToolTip = "Size straight-fin heat sinks for natural or forced air cooling"

    def __init__(self):
        super().__init__()
        self.Icon = str(_module_dir() / "icons" / "heatsink.svg")

        # Commands will be loaded in Initialize()
        self._commands = {}
        self._cmd_names = []

    def _load_commands(self):
        """Import gui_commands relative, as HeatsinkSizer.gui_commands, then top-level."""

        last_exc = None

        # 1) relative, when loaded as a package module
        try:
            from . import gui_commands as gc  # type: ignore[attr-defined]
            return gc.COMMANDS  # type: ignore[attr-defined]
        except Exception as exc:
            last_exc = exc

        # 2) installed HeatsinkSizer package
        try:
            import HeatsinkSizer.gui_commands as gc  # type: ignore[no-redef]
            return gc.COMMANDS  # type: ignore[attr-defined]
        except Exception as exc:
            last_exc = exc

        # 3) loose files on sys.path (FreeCAD Mod folder)
        try:
            import gui_commands as gc  # type: ignore[no-redef]
            return gc.COMMANDS  # type: ignore[attr-defined]
        except Exception as exc:
            last_exc = exc

        Gui.doCommand(
            'print("HeatsinkSizer: failed to import gui_commands; last error:", %r)'
            % (last_exc,)
        )
        return {}

    def Initialize(self):
        """Register commands; FreeCAD calls this on first activation."""
        self._commands = self._load_commands()
        self._cmd_names = list(self._commands.keys())

        for name, handler in self._commands.items():
            Gui.addCommand(name, handler)

        if self._cmd_names:
            self.appendToolbar("HeatsinkSizer", self._cmd_names)
            self.appendMenu("&HeatsinkSizer", self._cmd_names)

    def GetClassName(self):  # noqa: N802
        # Pure Python workbench must return this string
        return "Gui::PythonWorkbench"


Gui.addWorkbench(HeatsinkSizerWorkbench())
