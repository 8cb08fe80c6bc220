import json

from HeatsinkSizer.cli import main


def test_default_run_prints_summary(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Number of fins: 7" in out
    assert "Heat sink width: 42.6 mm" in out


def test_forced_flags(capsys):
    assert main(["--convection", "forced", "--air-velocity", "2"]) == 0
    assert "Number of fins: 3" in capsys.readouterr().out


def test_input_file_and_exports(tmp_path, capsys):
    src = tmp_path / "in.json"
    src.write_text(json.dumps({"power": 20, "material": "al_6061"}), encoding="utf-8")
    csv_path = tmp_path / "report.csv"
    cad_path = tmp_path / "cad.json"
    code = main(["-i", str(src), "--csv", str(csv_path), "--cad-json", str(cad_path)])
    assert code == 0
    assert "Number of fins: 14" in capsys.readouterr().out
    assert csv_path.exists()
    cad = json.loads(cad_path.read_text(encoding="utf-8"))
    assert cad["design"]["material"]["name"] == "Aluminum 6061"


def test_flag_overrides_input_file(tmp_path, capsys):
    src = tmp_path / "in.json"
    src.write_text(json.dumps({"power_w": 20}), encoding="utf-8")
    assert main(["-i", str(src), "--power", "10"]) == 0
    assert "Number of fins: 7" in capsys.readouterr().out


def test_validation_errors_exit_2(capsys):
    assert main(["--ambient", "90"]) == 2
    err = capsys.readouterr().err
    assert "Input validation error" in err
    assert "max_surface_temp_c" in err


def test_forced_without_velocity_exit_2(capsys):
    assert main(["--convection", "forced"]) == 2
    assert "air_velocity_m_s" in capsys.readouterr().err


def test_bad_input_file_exit_2(tmp_path, capsys):
    src = tmp_path / "in.json"
    src.write_text("{not json", encoding="utf-8")
    assert main(["-i", str(src)]) == 2
    assert main(["-i", str(tmp_path / "missing.json")]) == 2
    assert "Input error" in capsys.readouterr().err


def test_warnings_go_to_stderr(capsys):
    assert main(["--fin-thickness", "1.5"]) == 0
    assert "Warnings:" in capsys.readouterr().err


def test_list_materials(capsys):
    assert main(["--list-materials"]) == 0
    out = capsys.readouterr().out
    assert "copper" in out and "titanium" in out


def test_plot_output(tmp_path):
    out = tmp_path / "chart.png"
    assert main(["--plot", str(out)]) == 0
    assert out.exists()


def test_unwritable_csv_target_exit_2(tmp_path, capsys):
    assert main(["--csv", str(tmp_path)]) == 2
    captured = capsys.readouterr()
    assert "Number of fins: 7" in captured.out
    assert "Output error:" in captured.err


def test_unwritable_cad_target_exit_2(tmp_path, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    assert main(["--cad-json", str(blocker / "cad.json")]) == 2
    assert "Output error:" in capsys.readouterr().err
