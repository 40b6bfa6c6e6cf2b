"""Typed configuration schema and loader for the redactkit package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, SecretStr, conint

from redactkit.utils.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class DetectorSettings(BaseModel):
    """External entity detector settings."""

    backend: Literal["gemini"]
    model: str
    api_key_env: str
    api_key: SecretStr | None = None

    model_config = ConfigDict(extra="forbid")


class RedactionSettings(BaseModel):
    """Default redaction behaviour."""

    mode: Literal["MASK", "REDACT"]

    model_config = ConfigDict(extra="forbid")


class LoggingSettings(BaseModel):
    """Logging verbosity for the CLI."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    detector: DetectorSettings
    redaction: RedactionSettings
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

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable holding the detector API key.
    """

    with (
        importlib_resources.files("redactkit.config")
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

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    key_env = cfg.detector.api_key_env
    if environ.get(key_env):
        cfg.detector.api_key = SecretStr(environ[key_env])

    return cfg


def ensure_api_key(cfg: ConfigModel, *, strict: bool) -> bool:
    """Return ``True`` when a detector API key is configured.

    With ``strict`` a missing key raises :class:`ConfigurationError` naming the
    environment variable that should hold it.
    """

    key = cfg.detector.api_key
    present = key is not None and bool(key.get_secret_value())
    if not present and strict:
        raise ConfigurationError(
            f"detector API key missing; set the {cfg.detector.api_key_env} environment variable"
        )
    return present


__all__ = [
    "ConfigModel",
    "DetectorSettings",
    "RedactionSettings",
    "LoggingSettings",
    "deep_merge_dicts",
    "load_config",
    "ensure_api_key",
]
