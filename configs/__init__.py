"""Configuration loading for schedsim.

``default.yaml`` beside this module holds every key with its default; a user
file passed with ``--config`` only needs the keys it changes.
"""

import copy
from pathlib import Path
from typing import Optional
import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


def load_config(config_path: str) -> dict:
    """Read one YAML file; an empty file yields an empty dict."""
    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{config_path}: top level must be a mapping of sections")
    return config


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Overlay ``override_config`` onto a copy of ``base_config``.

    Sections merge key by key; any other value in the override replaces
    the base value.
    """
    merged = copy.deepcopy(base_config)
    for key, value in override_config.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            value = merge_configs(base_value, value)
        merged[key] = value
    return merged


def load_default_config(override_path: Optional[str] = None) -> dict:
    """Load the bundled defaults, optionally overlaid with a user file."""
    config = load_config(str(DEFAULT_CONFIG_PATH))
    if override_path:
        config = merge_configs(config, load_config(override_path))
    return config
