"""Typer-based command line interface for whole-file loading.

``filebuf lines`` reads a file in text mode, prints each non-empty line to
stdout and the line count to stderr.  ``filebuf read`` writes the loaded
content back to stdout and its length to stderr.  Both accept ``--max-size``
and a YAML ``--config``; ``--verbose`` adds timing information.

Exit codes
----------
0 success
2 invalid argument
3 I/O error (missing file, permission denied, unreadable input)
4 configuration error
5 size limit exceeded
6 out of memory
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .io import LoadMode, load, read_lines
from .utils.errors import ErrorKind, FileBufError
from .utils.logging import configure_logging, get_logger

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.INVALID_ARGUMENT: 2,
    ErrorKind.IO_ERROR: 3,
    ErrorKind.SIZE_LIMIT_EXCEEDED: 5,
    ErrorKind.OUT_OF_MEMORY: 6,
}
CONFIG_ERROR_EXIT = 4

app = typer.Typer(
    name="filebuf",
    help="Read whole files into memory. Use 'filebuf lines' to split a file into lines.",
)

log = get_logger("cli")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _fail(path: str, exc: FileBufError) -> NoReturn:
    _safe_exit(EXIT_CODES[exc.kind], f"filebuf: reading file \"{path}\": {exc}")


def _load_settings(config_path: Optional[Path], verbose: bool) -> ConfigModel:
    try:
        cfg = load_config(config_path)
    except (ValidationError, yaml.YAMLError, OSError) as exc:
        _safe_exit(CONFIG_ERROR_EXIT, str(exc).splitlines()[0])
    configure_logging("DEBUG" if verbose else cfg.logging.level)
    return cfg


class LoadTimer:
    """Time one load or split and, in verbose mode, report it on stderr."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose
        self.elapsed_ms = 0.0
        self._start = 0.0

    def __enter__(self) -> "LoadTimer":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.elapsed_ms = (perf_counter() - self._start) * 1000.0

    def report(self, summary: str) -> None:
        if self.verbose:
            typer.echo(f"{summary} in {self.elapsed_ms:.1f} ms", err=True)


@app.callback()
def main() -> None:
    """Entry point for the filebuf command group."""
    pass


@app.command()
def lines(
    path: str = typer.Argument(..., help="Text file to split into lines"),  # noqa: B008
    max_size: Optional[int] = typer.Option(  # noqa: B008
        None, "--max-size", min=0, help="Memory budget in bytes; 0 disables the limit"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit timing information to stderr"
    ),
) -> None:
    """Print each line of ``path`` and the line count."""

    cfg = _load_settings(config_path, verbose)
    limit = cfg.lines.max_size if max_size is None else max_size

    try:
        with LoadTimer(verbose) as timer:
            result = read_lines(path, limit)
    except FileBufError as exc:
        _fail(path, exc)
    timer.report(f"Read {result.count} lines")

    with result:
        for line in result:
            typer.echo(line)
        typer.echo(f"lineCount: {result.count}", err=True)


@app.command()
def read(
    path: str = typer.Argument(..., help="File to load"),  # noqa: B008
    text: Optional[bool] = typer.Option(  # noqa: B008
        None, "--text/--binary", help="Strip carriage returns (text) or keep bytes as-is"
    ),
    terminate: Optional[bool] = typer.Option(  # noqa: B008
        None, "--terminate/--no-terminate", help="Append a zero byte after the content"
    ),
    max_size: Optional[int] = typer.Option(  # noqa: B008
        None, "--max-size", min=0, help="Buffer size limit in bytes; 0 disables the limit"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit timing information to stderr"
    ),
) -> None:
    """Load ``path`` and write its content to stdout."""

    cfg = _load_settings(config_path, verbose)
    mode = cfg.load.load_mode if text is None else (LoadMode.TEXT if text else LoadMode.BINARY)
    should_terminate = cfg.load.terminate if terminate is None else terminate
    limit = cfg.load.max_size if max_size is None else max_size
    log.debug(
        "loading %s mode=%s terminate=%s max_size=%d", path, mode.value, should_terminate, limit
    )

    try:
        with LoadTimer(verbose) as timer:
            buf = load(path, mode, should_terminate, limit)
    except FileBufError as exc:
        _fail(path, exc)
    timer.report(f"Loaded {buf.length} bytes")

    with buf:
        typer.echo(buf.tobytes(), nl=False)
        typer.echo(f"length: {buf.length}", err=True)
