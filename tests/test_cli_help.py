from __future__ import annotations

from typer.testing import CliRunner

from redactkit.cli import app


def test_global_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "redactkit run" in result.stdout
    for command in ("run", "detect", "evaluate"):
        assert command in result.stdout


def test_run_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["run", "--help"])
    for option in ("--in", "--out", "--mode", "--entities", "--expected", "--config", "--report"):
        assert option in result.stdout
