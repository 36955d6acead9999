"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from filebuf.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def _detach_cli_logging() -> Iterator[None]:
    """Drop handlers bound to a ``CliRunner`` stream once a test finishes."""

    yield
    reset_logging()
