"""Command line tests for the planetary hours Typer application."""

from __future__ import annotations

import importlib
import json

import pytest
from typer.testing import CliRunner

cli_app = importlib.import_module("planetaryhours.cli.app")

runner = CliRunner()

_OBSERVER = ["--lat", "37.8714", "--lon", "-109.3425", "--tz", "America/Denver"]


@pytest.fixture(autouse=True)
def _stub_provider(monkeypatch, monticello_provider):
    monkeypatch.setattr(cli_app, "get_provider", lambda settings=None: monticello_provider)
    return monticello_provider


def test_day_table():
    result = runner.invoke(cli_app.app, ["day", *_OBSERVER, "--at", "2024-06-16T12:00:00"])

    assert result.exit_code == 0, result.output
    assert "2024-06-16 (☉ Sun day)" in result.output
    assert "Day Hours" in result.output
    assert "Night Hours" in result.output
    assert "Now" in result.output


def test_day_json():
    result = runner.invoke(
        cli_app.app, ["day", *_OBSERVER, "--at", "2024-06-16T12:00:00", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["date"] == "2024-06-16"
    assert payload["day_ruler"] == "Sun"
    assert len(payload["hours"]) == 24
    assert payload["hours"][4]["is_current"] is True
    assert payload["hours"][4]["planet"] == "Saturn"


def test_day_for_other_date_has_no_current_hour():
    result = runner.invoke(
        cli_app.app,
        ["day", *_OBSERVER, "--date", "2024-06-17", "--at", "2024-06-16T12:00:00", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["day_ruler"] == "Moon"
    assert not any(hour["is_current"] for hour in payload["hours"])


def test_day_waking_filter():
    result = runner.invoke(
        cli_app.app,
        ["day", *_OBSERVER, "--at", "2024-06-16T12:00:00", "--waking", "--json"],
    )

    assert result.exit_code == 0, result.output
    assert [hour["hour"] for hour in json.loads(result.output)["hours"]] == [*range(1, 16), 24]


def test_day_rejects_bad_latitude():
    result = runner.invoke(
        cli_app.app,
        ["day", "--lat", "95", "--lon", "0", "--tz", "UTC", "--at", "2024-06-16T12:00:00"],
    )

    assert result.exit_code == 2
    assert "error:" in result.output


def test_day_requires_location():
    result = runner.invoke(cli_app.app, ["day", "--at", "2024-06-16T12:00:00"])

    assert result.exit_code == 2
    assert "required" in result.output


def test_day_uses_configured_location(tmp_path):
    config = tmp_path / "config.yaml"
    config.write_text(
        "schema_version: 2\n"
        "location:\n"
        "  latitude: 37.8714\n"
        "  longitude: -109.3425\n"
        "  timezone: America/Denver\n",
        encoding="utf-8",
    )

    result = runner.invoke(
        cli_app.app, ["day", "--config", str(config), "--at", "2024-06-16T12:00:00"]
    )

    assert result.exit_code == 0, result.output
    assert "[America/Denver]" in result.output


def test_now_at_night():
    result = runner.invoke(cli_app.app, ["now", *_OBSERVER, "--at", "2024-06-17T05:00:00"])

    assert result.exit_code == 0, result.output
    assert "Venus hour" in result.output
    assert "night hour 11" in result.output


def test_now_json():
    result = runner.invoke(
        cli_app.app, ["now", *_OBSERVER, "--at", "2024-06-16T18:00:00Z", "--json"]
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert payload["hour"] == 5
    assert payload["planet"] == "Saturn"
    assert payload["is_current"] is True


def test_rulers():
    result = runner.invoke(cli_app.app, ["rulers"])

    assert result.exit_code == 0, result.output
    assert "Sunday" in result.output
    assert "☉" in result.output


def test_rulers_json():
    result = runner.invoke(cli_app.app, ["rulers", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert [entry["weekday"] for entry in payload][:2] == ["Sunday", "Monday"]
    assert payload[0]["hours"][:3] == ["Sun", "Venus", "Mercury"]
