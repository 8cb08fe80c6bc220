"""Report-view logging shared by the workbench modules."""
from __future__ import annotations

try:
    import FreeCAD as App  # type: ignore
except Exception:  # pragma: no cover
    App = None  # type: ignore


def log(msg: str) -> None:
    prefix = "[HSS] "
    if App is not None:
        App.Console.PrintMessage(prefix + msg + "\n")
    else:
        print(prefix + msg)


def log_err(msg: str) -> None:
    prefix = "[HSS-ERR] "
    if App is not None:
        App.Console.PrintError(prefix + msg + "\n")
    else:
        print(prefix + msg)
