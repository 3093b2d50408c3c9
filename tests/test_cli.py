# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from farmland_linkage.cli import app

runner = CliRunner()


def test_link_command_writes_json(registry_path, ledger_path, polygons_path, tmp_path) -> None:
    out = tmp_path / "out.json"

    result = runner.invoke(
        app,
        ["link", str(registry_path), str(ledger_path), "--polygons", str(polygons_path), "--out", str(out), "--pretty"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert list(data["linkage"]) == ["F1", "F2"]
    assert data["spatial_join"]["F2"] == "P2"


def test_stats_command(registry_path, ledger_path) -> None:
    result = runner.invoke(app, ["stats", str(registry_path), str(ledger_path)])

    assert result.exit_code == 0, result.output
    assert "Linkage Statistics" in result.output
    assert "75.0%" in result.output


def test_join_command(registry_path, polygons_path) -> None:
    result = runner.invoke(app, ["join", str(registry_path), str(polygons_path)])

    assert result.exit_code == 0, result.output
    assert "2/3 features matched with polygons" in result.output
    assert "P-bowtie" in result.output


def test_triage_command(registry_path, ledger_path) -> None:
    result = runner.invoke(app, ["triage", str(registry_path), str(ledger_path), "--threshold", "0.5", "-n", "2"])

    assert result.exit_code == 0, result.output
    assert "Flexible match" in result.output


def test_address_command() -> None:
    result = runner.invoke(app, ["address", "福岡県みやま市高田町字本村123-4"])

    assert result.exit_code == 0, result.output
    assert "本村" in result.output
    assert "123-4" in result.output


def test_missing_input_file_fails(tmp_path) -> None:
    result = runner.invoke(app, ["stats", str(tmp_path / "none.geojson"), str(tmp_path / "none.csv")])

    assert result.exit_code != 0
