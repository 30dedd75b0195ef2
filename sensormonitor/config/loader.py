"""YAML config loader with environment overrides and dotted-key lookup."""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from sensormonitor.config.defaults import ENV_OVERRIDES, REDACTED
from sensormonitor.config.schema import MonitorConfig

logger = logging.getLogger(__name__)


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> MonitorConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. INFLUX_* environment variables
    override the matching ``influx`` keys.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.warning("Config file %s not found, using defaults", path)

    env = os.environ if environ is None else environ
    for var, (section, key) in ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            raw.setdefault(section, {})[key] = value

    return MonitorConfig(**raw)


def get_config_value(config: MonitorConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'influx.bucket'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redacted_config(config: MonitorConfig) -> MonitorConfig:
    """Copy of the config with the API token masked."""
    token = REDACTED if config.influx.token else ""
    return config.model_copy(
        update={"influx": config.influx.model_copy(update={"token": token})}
    )


def redacted_json(config: MonitorConfig) -> str:
    """Config as JSON with the API token masked."""
    return redacted_config(config).model_dump_json(indent=2)
