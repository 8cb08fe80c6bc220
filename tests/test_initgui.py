from pathlib import Path

import HeatsinkSizer.InitGui as initgui


def test_module_dir_prefers_file():
    assert initgui._module_dir() == Path(initgui.__file__).parent


def test_module_dir_fallbacks_to_spec_origin(monkeypatch):
    original_file = initgui.__dict__.pop("__file__", None)
    monkeypatch.setattr(initgui, "__spec__", initgui.__spec__)
    try:
        result = initgui._module_dir()
    finally:
        if original_file is not None:
            initgui.__dict__["__file__"] = original_file
    assert result == Path(initgui.__spec__.origin).parent


def test_workbench_registers_commands(monkeypatch):
    added = []
    monkeypatch.setattr(initgui.Gui, "addCommand", lambda name, cmd: added.append(name))
    workbench = initgui.HeatsinkSizerWorkbench()
    workbench.Initialize()
    assert added == ["HSS_SizeHeatsink"]
    assert workbench.GetClassName() == "Gui::PythonWorkbench"


def test_loose_workbench_loads_package_commands():
    import importlib.util

    import HeatsinkSizer.gui_commands as package_commands

    spec = importlib.util.spec_from_file_location("loose_initgui", initgui.__file__)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    workbench = module.HeatsinkSizerWorkbench()
    assert workbench._load_commands() is package_commands.COMMANDS
