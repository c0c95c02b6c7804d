"""Configuration management utilities."""

import copy
from pathlib import Path
from typing import Any, Sequence
import yaml
from loguru import logger


def load_config(path: str | Path) -> dict[str, Any]:
    """Load configuration from YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    logger.info(f"Loaded config from {path}")
    return config


def merge_configs(*configs: dict) -> dict[str, Any]:
    """
    Merge multiple configurations (later configs override earlier).

    Nested dicts are merged key by key instead of being replaced.
    Inputs are deep-copied, so the result never aliases them.
    """
    result = {}
    for config in configs:
        _deep_merge(result, copy.deepcopy(config))
    return result


def _deep_merge(base: dict, override: dict) -> None:
    """Deep merge override into base."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def get_nested(config: dict, path: Sequence[str]) -> Any:
    """Get the value stored under a key path, e.g. ("params", "max_depth")."""
    value = config
    for key in path:
        value = value[key]
    return value


def set_nested(config: dict, path: Sequence[str], value: Any) -> None:
    """Set the value under a key path, creating intermediate dicts."""
    if not path:
        raise ValueError("Key path must not be empty")

    node = config
    for key in path[:-1]:
        if not isinstance(node.get(key), dict):
            node[key] = {}
        node = node[key]
    node[path[-1]] = value
