from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from filebuf.cli import app


def test_cli_lines_prints_lines_and_count(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"a\r\nb\n\nc")
    runner = CliRunner()
    result = runner.invoke(app, ["lines", str(in_txt)])
    assert result.exit_code == 0
    assert result.stdout.startswith("a\nb\nc\n")
    assert "lineCount: 3" in result.output


def test_cli_lines_empty_file(tmp_path: Path) -> None:
    in_txt = tmp_path / "empty.txt"
    in_txt.write_bytes(b"")
    runner = CliRunner()
    result = runner.invoke(app, ["lines", str(in_txt)])
    assert result.exit_code == 0
    assert "lineCount: 0" in result.output


def test_cli_read_text_strips_carriage_returns(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"x\r\ny\r\n")
    runner = CliRunner()
    result = runner.invoke(app, ["read", "--text", str(in_txt)])
    assert result.exit_code == 0
    assert result.stdout_bytes.startswith(b"x\ny\n")
    assert "length: 4" in result.output


def test_cli_read_binary_is_verbatim(tmp_path: Path) -> None:
    in_bin = tmp_path / "in.bin"
    in_bin.write_bytes(b"x\r\ny")
    runner = CliRunner()
    result = runner.invoke(app, ["read", "--binary", str(in_bin)])
    assert result.exit_code == 0
    assert result.stdout_bytes.startswith(b"x\r\ny")
    assert "length: 4" in result.output


def test_cli_config_sets_mode(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"x\r\n")
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("load:\n  mode: text\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["read", "--config", str(cfg), str(in_txt)])
    assert result.exit_code == 0
    assert "length: 2" in result.output


def test_cli_verbose_reports_timing(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"one\ntwo\n")
    runner = CliRunner()
    result = runner.invoke(app, ["lines", "--verbose", str(in_txt)])
    assert result.exit_code == 0
    assert "Read 2 lines in" in result.output


def test_cli_read_verbose_reports_bytes(tmp_path: Path) -> None:
    in_bin = tmp_path / "in.bin"
    in_bin.write_bytes(b"abc")
    runner = CliRunner()
    result = runner.invoke(app, ["read", "--binary", "-v", str(in_bin)])
    assert result.exit_code == 0
    assert "Loaded 3 bytes in" in result.output


def test_cli_quiet_run_has_no_timing(tmp_path: Path) -> None:
    in_txt = tmp_path / "in.txt"
    in_txt.write_bytes(b"one\ntwo\n")
    runner = CliRunner()
    result = runner.invoke(app, ["lines", str(in_txt)])
    assert result.exit_code == 0
    assert " ms" not in result.output
