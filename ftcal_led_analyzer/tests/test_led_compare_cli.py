from __future__ import annotations

import json

import numpy as np

from ftcal_led_analyzer.scripts.led_compare import main


def test_cli_summary_and_plots(make_led_file, tmp_path, capsys) -> None:
    data = tmp_path / "data"
    make_led_file("00200", np.full(332, 110.0), folder=data)
    make_led_file("00100", np.full(332, 100.0), folder=data)
    make_led_file(name="ftCalLed_-bad00_x.txt", folder=data)
    (data / "readme.txt").write_text("not a run\n", encoding="utf-8")

    out = tmp_path / "plots"
    rc = main([str(data), "--out-dir", str(out)])
    assert rc == 0

    text = capsys.readouterr().out
    assert "baseline run: 00100" in text
    assert "run 00200: 332 components, 39 radial bins, mean ratio=1.1000" in text
    assert "MalformedIdentifier" in text
    assert "readme.txt" in text
    assert (out / "radial_distance.png").exists()


def test_cli_no_runs_returns_one(tmp_path, capsys) -> None:
    rc = main([str(tmp_path), "--no-plots"])
    assert rc == 1
    assert "no run could be loaded" in capsys.readouterr().out


def test_cli_profile_and_overrides(make_led_file, tmp_path, capsys) -> None:
    data = tmp_path / "data"
    make_led_file(name="LED_00001.dat", folder=data)
    prof = tmp_path / "profile.json"
    prof.write_text(json.dumps({"marker": "LED_", "extension": ".dat"}), encoding="utf-8")

    rc = main([str(data), "--profile", str(prof), "--tolerance", "1e-9", "--no-plots"])
    assert rc == 0
    assert "baseline run: 00001" in capsys.readouterr().out
