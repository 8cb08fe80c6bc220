"""Tests for GUI command helpers."""

import importlib
import sys
from types import SimpleNamespace

from HeatsinkSizer import gui_commands


def test_commands_registered():
    assert list(gui_commands.COMMANDS) == ["HSS_SizeHeatsink"]
    resources = gui_commands.COMMANDS["HSS_SizeHeatsink"].GetResources()
    assert resources["MenuText"] == "Size Heatsink"


def test_import_taskpanel_prefers_relative(monkeypatch):
    """Relative import should be attempted before absolute names."""

    sentinel = type("DummyPanel", (), {})
    calls: list[tuple[str, str | None]] = []

    def fake_import(name: str, package: str | None = None):
        calls.append((name, package))
        if name == ".gui_sizing_mode" and package == "HeatsinkSizer":
            return SimpleNamespace(SizingTaskPanel=sentinel)
        raise ImportError("not found")

    monkeypatch.setattr(gui_commands, "__package__", "HeatsinkSizer")
    monkeypatch.setattr(gui_commands, "import_module", fake_import)

    assert gui_commands._import_taskpanel("gui_sizing_mode", "SizingTaskPanel") is sentinel
    assert calls[0] == (".gui_sizing_mode", "HeatsinkSizer")


def test_import_taskpanel_loads_neighbor_file(monkeypatch, tmp_path):
    """Fallback loader should import modules next to gui_commands when packaged loosely."""

    panel_src = """
class SizingTaskPanel:
    pass
"""
    neighbor = tmp_path / "gui_sizing_mode.py"
    neighbor.write_text(panel_src)

    # Simulate a top-level import where __package__ is None
    monkeypatch.setattr(gui_commands, "__package__", None)
    monkeypatch.setattr(gui_commands, "__file__", str(tmp_path / "gui_commands.py"))
    monkeypatch.delitem(sys.modules, "gui_sizing_mode", raising=False)

    # Force standard import attempts to fail so the fallback is used
    def fail_import(name: str, package: str | None = None):
        raise ImportError("not available")

    monkeypatch.setattr(gui_commands, "import_module", fail_import)

    PanelClass = gui_commands._import_taskpanel("gui_sizing_mode", "SizingTaskPanel")

    assert PanelClass is not None
    assert PanelClass.__name__ == "SizingTaskPanel"
    # Ensure the module was registered in sys.modules for future imports
    assert importlib.import_module("gui_sizing_mode").SizingTaskPanel is PanelClass


def test_import_taskpanel_returns_none_when_missing(monkeypatch, tmp_path):
    monkeypatch.setattr(gui_commands, "__file__", str(tmp_path / "gui_commands.py"))

    def fail_import(name: str, package: str | None = None):
        raise ImportError("not available")

    monkeypatch.setattr(gui_commands, "import_module", fail_import)
    assert gui_commands._import_taskpanel("gui_sizing_mode", "SizingTaskPanel") is None
