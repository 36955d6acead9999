"""Typed configuration schema and loader for the filebuf package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint

from ..io.loader import LoadMode

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class LoadSettings(BaseModel):
    """Defaults applied to whole-file loads."""

    mode: Literal["binary", "text"]
    terminate: bool
    max_size: conint(ge=0) = 0

    model_config = ConfigDict(extra="forbid")

    @property
    def load_mode(self) -> LoadMode:
        return LoadMode(self.mode)


class LinesSettings(BaseModel):
    """Defaults applied to line splitting."""

    max_size: conint(ge=0) = 0

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Logging level used by the command line interface."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = ConfigDict(extra="forbid")


class EnvSettings(BaseModel):
    """Names of environment variables consulted after YAML sources."""

    max_size: str

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    load: LoadSettings
    lines: LinesSettings
    logging: LoggingSettings
    env: EnvSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def merge_config(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Layer ``override`` onto ``base`` section by section.

    Nested sections are copied, so the returned mapping never aliases the
    packaged defaults.  A non-mapping override replaces the whole section.
    """

    merged = {
        key: dict(value) if isinstance(value, Mapping) else value for key, value in base.items()
    }
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_config(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    the environment variable named by ``env.max_size``, which sets both
    ``load.max_size`` and ``lines.max_size``.
    """

    with (
        importlib_resources.files("filebuf.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = merge_config(defaults, overrides)
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    raw = environ.get(cfg.env.max_size)
    if raw is not None and raw.strip():
        update = {"max_size": raw.strip()}
        cfg = ConfigModel.model_validate(
            merge_config(cfg.model_dump(), {"load": update, "lines": update})
        )

    return cfg


__all__ = [
    "ConfigModel",
    "LoadSettings",
    "LinesSettings",
    "LoggingSettings",
    "EnvSettings",
    "merge_config",
    "load_config",
]
