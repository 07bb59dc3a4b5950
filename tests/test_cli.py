"""Tests for the command-line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from feed_briefing.cli import app

runner = CliRunner()


def test_feeds_lists_sample_items(tmp_path: Path) -> None:
    """Test the feeds command prints the built-in items."""
    result = runner.invoke(app, ["feeds", "--config", str(tmp_path / "config.yaml")])

    assert result.exit_code == 0
    assert "[1] SpaceX Starship Successfully Reaches Orbit" in result.output
    assert "VentureBeat" in result.output


def test_feeds_reports_missing_items_file(tmp_path: Path) -> None:
    """Test a missing items file exits with an error."""
    result = runner.invoke(
        app,
        ["feeds", "--config", str(tmp_path / "config.yaml"), "--items", str(tmp_path / "nope.yaml")],
    )

    assert result.exit_code == 1
    assert "Items file not found" in result.output


def test_report_fails_visibly_without_api_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test a transport failure is shown and nothing is saved."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    output = tmp_path / "report.md"

    result = runner.invoke(
        app,
        ["report", "--config", str(tmp_path / "config.yaml"), "--output", str(output)],
    )

    assert result.exit_code == 1
    assert "Failed to generate report" in result.output
    assert not output.exists()


def test_report_uses_configured_profile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test the profile and preferences from the config file are used."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "profile:\n  name: Jamie\n  primary_topics: [Fusion Energy]\n"
        "report_preferences:\n  frequency: daily\n  tone: concise\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["report", "--config", str(config_path), "--output", str(tmp_path / "r.md")])

    assert "Profile: Jamie (daily, concise)" in result.output
    assert result.exit_code == 1


def test_invalid_config_exits_with_error(tmp_path: Path) -> None:
    """Test an invalid setting is reported before anything runs."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("delivery_channels:\n  email: {format: pdf}\n", encoding="utf-8")

    result = runner.invoke(app, ["feeds", "--config", str(config_path)])

    assert result.exit_code == 1
    assert "email.format" in result.output
