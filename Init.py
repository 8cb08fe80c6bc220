"""FreeCAD entry point for the HeatsinkSizer workbench.

This thin wrapper lets FreeCAD's Addon Manager treat the repository
root as the module directory while delegating the real logic to the
`HeatsinkSizer` package.
"""

from HeatsinkSizer.Init import FreeCADInit, Initialize, dependency_status

__all__ = ["FreeCADInit", "Initialize", "dependency_status"]
