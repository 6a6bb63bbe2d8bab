"""Configuration loader for the royalty settlement core

All configurable values come from config/config.yaml.
No magic numbers in code - everything is configurable.

Configuration is validated at load time using Pydantic.
Typos and invalid values fail fast with clear error messages.

Usage:
    from src.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    limit = get("settlement.max_contributors")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    limit = config.settlement.max_contributors
"""

from __future__ import annotations

import copy
import logging
import yaml
from pathlib import Path
from typing import Any

from .config_schema import AppConfig, load_validated_config, validate_config_dict


# Global config instances
_config: dict[str, Any] | None = None
_validated_config: AppConfig | None = None

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load and validate configuration from YAML file.

    Validates the config against the Pydantic schema. Invalid configs
    raise a ValidationError with details about what's wrong.

    Args:
        config_path: Path to config file. Defaults to config/config.yaml.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _config, _validated_config

    path: Path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _validated_config = load_validated_config(path)

    with open(path) as f:
        loaded: Any = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            loaded = {}
        _config = loaded

    logging.getLogger("src").setLevel(_validated_config.logging.level)
    return _config


def get_config() -> dict[str, Any]:
    """Get the loaded configuration dict. Loads default if not already loaded.

    For typed access, use get_validated_config() instead.
    """
    global _config
    if _config is None:
        load_config()
    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")
    return _config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Returns a typed AppConfig instance with IDE autocompletion support.
    Loads default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Keys missing from the YAML file fall back to the schema defaults.

    Examples:
        get("settlement.max_contributors")
        get("logging.default_recent")
    """
    for source in (get_config(), get_validated_config().model_dump()):
        value: Any = source
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                break
        else:
            return value
    return default


def set_config_value(key: str, value: Any) -> None:
    """Set a config value by dot-separated key path.

    Used for runtime overrides (e.g., tests). The change is applied to a
    copy and validated first, so an invalid value raises without altering
    the loaded config.

    Args:
        key: Dot-separated key path (e.g., "settlement.max_contributors")
        value: Value to set
    """
    global _config, _validated_config

    if _config is None:
        load_config()

    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")

    keys = key.split(".")
    updated = copy.deepcopy(_config)
    target = updated

    # Navigate to parent
    for k in keys[:-1]:
        if k not in target:
            target[k] = {}
        target = target[k]

    target[keys[-1]] = value

    # Validate before swapping in; a rejected value leaves both views as they were
    validated = validate_config_dict(updated)
    _config = updated
    _validated_config = validated


def reload_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Drop cached config and load again from disk."""
    global _config, _validated_config
    _config = None
    _validated_config = None
    return load_config(config_path)
