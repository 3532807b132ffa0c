"""Viewer settings from an optional YAML file and ``LV_*`` environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigError
from .models import parse_output_mode

logger = logging.getLogger(__name__)

ENV_PREFIX = "LV_"
CONFIG_ENV = "LV_CONFIG"
APP_DIR = "logviewer"
CONFIG_NAME = "config.yaml"


class ViewerSettings(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    local: bool = Field(default=False, description="Display times in the local timezone.")
    timezone: str = Field(default="UTC", description="Display timezone (IANA name, UTC or Local).")
    output: str = Field(default="long", description="Output mode: long, short, simple, json, json-N, bunyan.")
    color: bool | None = Field(
        default=None,
        description="Force colors on (true) or off (false); unset colors only a TTY.",
    )

    @field_validator("output")
    @classmethod
    def _known_output(cls, value: str) -> str:
        parse_output_mode(value)
        return value


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    base = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR / CONFIG_NAME


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return data


def load_settings(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ViewerSettings:
    """Load settings: defaults, then the config file, then ``LV_*`` variables.

    An explicitly requested config file must exist; the default one is optional.
    """
    env = os.environ if env is None else env

    explicit = config_path or env.get(CONFIG_ENV)
    path = Path(explicit) if explicit else default_config_path(env)

    values: dict[str, Any] = {}
    if path.is_file():
        values.update(_read_yaml(path))
        logger.info("Config file: %s", path)
    elif explicit:
        raise ConfigError(f"Config file not found: {path}")
    else:
        logger.debug("Config file not found: %s", path)

    for name in ViewerSettings.model_fields:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None and raw != "":
            values[name] = raw

    try:
        return ViewerSettings.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
