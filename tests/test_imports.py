"""Smoke tests for package import and version."""

import filebuf


def test_import_package() -> None:
    assert isinstance(filebuf, object)


def test_version() -> None:
    assert filebuf.__version__ == "0.1.0"


def test_public_api() -> None:
    for name in ("load", "read_lines", "release", "LoadMode", "OwnedBuffer", "LineArray"):
        assert hasattr(filebuf, name)
