"""GUI entry point for the HeatsinkSizer workbench.

It forwards GUI registration to the package module so that installing
via FreeCAD's Addon Manager works without moving files around.
"""

from HeatsinkSizer.InitGui import HeatsinkSizerWorkbench

__all__ = ["HeatsinkSizerWorkbench"]
