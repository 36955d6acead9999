"""Tests for ``max_size`` enforcement on loads and splits."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from filebuf.io import lines as lines_mod
from filebuf.io import loader
from filebuf.io.buffer import OwnedBuffer
from filebuf.io.lines import REFERENCE_SIZE, read_lines
from filebuf.io.loader import LoadMode, load
from filebuf.utils.errors import ErrorKind, SizeLimitExceededError


def _write(tmp_path: Path, content: bytes) -> Path:
    file_path = tmp_path / "data.txt"
    file_path.write_bytes(content)
    return file_path


def _refuse_allocation(size: int) -> bytearray:
    raise AssertionError("allocation attempted despite size limit")


def test_binary_exact_limit_succeeds(tmp_path: Path) -> None:
    file_path = _write(tmp_path, b"12345")
    assert load(file_path, max_size=5).length == 5


def test_binary_limit_below_size_fails_without_allocating(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    file_path = _write(tmp_path, b"12345")
    monkeypatch.setattr(loader, "_allocate", _refuse_allocation)
    with pytest.raises(SizeLimitExceededError) as excinfo:
        load(file_path, max_size=4)
    assert excinfo.value.kind is ErrorKind.SIZE_LIMIT_EXCEEDED
    assert excinfo.value.required == 5
    assert excinfo.value.max_size == 4


def test_terminator_counts_against_limit(tmp_path: Path) -> None:
    file_path = _write(tmp_path, b"12345")
    with pytest.raises(SizeLimitExceededError):
        load(file_path, terminate=True, max_size=5)
    assert load(file_path, terminate=True, max_size=6).length == 5


def test_text_mode_charges_forced_terminator(tmp_path: Path) -> None:
    file_path = _write(tmp_path, b"a\r\nb")
    with pytest.raises(SizeLimitExceededError):
        load(file_path, LoadMode.TEXT, max_size=4)
    assert load(file_path, LoadMode.TEXT, max_size=5).tobytes() == b"a\nb"


def test_zero_means_unbounded(tmp_path: Path) -> None:
    file_path = _write(tmp_path, b"x" * 4096)
    assert load(file_path, max_size=0).length == 4096


def test_split_budget_includes_line_references(tmp_path: Path) -> None:
    content = b"a\nb\n"
    file_path = _write(tmp_path, content)
    # two delimiters, so two references plus the sentinel
    required = 3 * REFERENCE_SIZE + len(content) + 1
    assert read_lines(file_path, max_size=required).count == 2
    with pytest.raises(SizeLimitExceededError) as excinfo:
        read_lines(file_path, max_size=required - 1)
    assert excinfo.value.required == required


def test_split_budget_failure_releases_buffer(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    file_path = _write(tmp_path, b"one\ntwo\nthree\n")
    loaded: list[OwnedBuffer] = []

    def _capture(*args: Any, **kwargs: Any) -> OwnedBuffer:
        buf = loader.load(*args, **kwargs)
        loaded.append(buf)
        return buf

    monkeypatch.setattr(lines_mod, "load", _capture)
    with pytest.raises(SizeLimitExceededError):
        read_lines(file_path, max_size=len(b"one\ntwo\nthree\n") + 1)
    assert len(loaded) == 1
    assert loaded[0].released
