from __future__ import annotations

from typer.testing import CliRunner

from filebuf.cli import app


def test_global_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "lines" in result.stdout
    assert "read" in result.stdout


def test_lines_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["lines", "--help"])
    assert "--max-size" in result.stdout
    assert "--config" in result.stdout


def test_read_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["read", "--help"])
    assert "--text" in result.stdout
    assert "--terminate" in result.stdout
