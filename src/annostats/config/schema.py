"""Typed configuration schema and loader for annostats."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class AlignmentSettings(BaseModel):
    """How items are keyed and labelled during alignment.

    ``label_field`` set to ``None`` selects span-only mode.
    """

    span_key: Literal["extent", "text"]
    label_field: str | None

    model_config = ConfigDict(extra="forbid")


class ReportSettings(BaseModel):
    """Rendering options for metric reports."""

    digits: conint(ge=0, le=10) = 3
    format: Literal["table", "json"] = "table"
    show_confusion: bool = False

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Package log level and the environment variable that overrides it."""

    level: LogLevel = "WARNING"
    level_env: str = "ANNOSTATS_LOG_LEVEL"

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    alignment: AlignmentSettings
    report: ReportSettings
    logging: LoggingSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML < the
    environment variable named by ``logging.level_env``.
    """

    with (
        importlib_resources.files("annostats.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            overrides = yaml.safe_load(f) or {}
        merged = deep_merge_dicts(defaults, overrides)
    else:
        merged = defaults

    environ = env if env is not None else os.environ
    level_env = merged.get("logging", {}).get("level_env", "ANNOSTATS_LOG_LEVEL")
    if level_env in environ:
        merged = deep_merge_dicts(merged, {"logging": {"level": environ[level_env].upper()}})

    return ConfigModel.model_validate(merged)


__all__ = [
    "ConfigModel",
    "AlignmentSettings",
    "ReportSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_config",
]
