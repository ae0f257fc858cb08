"""
Tests for the wizard-check command-line tool.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from workout_wizard import cli

FIXTURES = Path(__file__).parent / "fixtures"

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Keep the CLI from reconfiguring loguru's sinks during tests."""
    monkeypatch.setattr(cli, "setup_logger", lambda **kwargs: None)


def test_validate_clean_values():
    result = runner.invoke(cli.app, ["validate", str(FIXTURES / "values_detailed.json")])

    assert result.exit_code == 0
    assert "Current State" in result.output
    assert "INVALID" not in result.output
    assert "energy and stress" in result.output


def test_validate_invalid_values_exits_nonzero():
    result = runner.invoke(cli.app, ["validate", str(FIXTURES / "values_invalid.json")])

    assert result.exit_code == 1
    assert "INVALID" in result.output


def test_validate_single_step():
    result = runner.invoke(
        cli.app,
        ["validate", str(FIXTURES / "values_quick_partial.json"), "--step", "focus-energy"],
    )

    assert result.exit_code == 0
    assert "Focus & Energy" in result.output
    assert "Workout Structure" not in result.output


def test_validate_unknown_step():
    result = runner.invoke(
        cli.app, ["validate", str(FIXTURES / "values_detailed.json"), "--step", "cool-down"]
    )

    assert result.exit_code == 1
    assert "Unknown step" in result.output


def test_validate_rejects_non_object(tmp_path):
    values_file = tmp_path / "values.json"
    values_file.write_text("[1, 2, 3]")

    result = runner.invoke(cli.app, ["validate", str(values_file)])

    assert result.exit_code == 1
    assert "JSON object" in result.output


def test_summary():
    result = runner.invoke(cli.app, ["summary", str(FIXTURES / "values_detailed.json")])

    assert result.exit_code == 0
    assert "1h 15m" in result.output
    assert "Poor (2/6)" in result.output
    assert "Overall:" in result.output
    assert "64%" in result.output


def test_steps():
    result = runner.invoke(cli.app, ["steps"])

    assert result.exit_code == 0
    assert "current-state" in result.output
    assert "wellness" in result.output
