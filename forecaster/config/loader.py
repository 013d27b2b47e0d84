"""YAML config loader and dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from forecaster.config.schema import ForecasterConfig


def load_config(path: str | Path) -> ForecasterConfig:
    """Load and validate config from a YAML file.

    An empty file yields the defaults.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ForecasterConfig(**raw)


def load_config_or_default(path: str | Path) -> ForecasterConfig:
    path = Path(path)
    if not path.exists():
        return ForecasterConfig()
    return load_config(path)


def get_config_value(config: ForecasterConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_seconds'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
