"""Pydantic schema for configuration validation.

All config values are validated at startup. Typos and invalid values
fail fast with clear error messages.

Usage:
    from src.config_schema import load_validated_config, AppConfig
    config = load_validated_config("config/config.yaml")
    # config is now a validated AppConfig instance
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# BASE MODEL WITH STRICT VALIDATION
# =============================================================================

class StrictModel(BaseModel):
    """Base model that rejects unknown fields (catches typos)."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# SETTLEMENT MODEL
# =============================================================================

DigestName = Literal["sha256", "sha3_256", "blake2b"]


class SettlementConfig(StrictModel):
    """Settlement core configuration (registry, engine, ledger)."""

    max_contributors: int = Field(
        default=5,
        ge=1,
        description="Maximum number of contributors per artifact"
    )
    total_shares: Literal[100] = Field(
        default=100,
        description="Contributor percentages must sum to exactly this value"
    )
    max_note_length: int = Field(
        default=64,
        ge=0,
        description="Maximum length of a contributor note"
    )
    escrow_id: str = Field(
        default="settlement_escrow",
        min_length=1,
        description="Principal holding distributed value until withdrawal"
    )
    digest: DigestName = Field(
        default="sha256",
        description="Hash function used to derive artifact IDs (32-byte digests)"
    )


# =============================================================================
# LOGGING MODEL
# =============================================================================

class LoggingConfig(StrictModel):
    """Logging configuration."""

    output_file: str = Field(
        default="settlement_events.jsonl",
        description="JSONL file for settlement events"
    )
    default_recent: int = Field(
        default=50,
        gt=0,
        description="Default number of recent events to return"
    )
    level: str = Field(
        default="INFO",
        description="Level for the stdlib 'src' logger hierarchy"
    )

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level: {value}")
        return level


# =============================================================================
# ROOT CONFIG MODEL
# =============================================================================

class AppConfig(StrictModel):
    """Root configuration model for the entire application.

    All fields have sensible defaults, so an empty config file is valid.
    """

    settlement: SettlementConfig = Field(default_factory=SettlementConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# LOADING FUNCTIONS
# =============================================================================

def load_validated_config(config_path: str | Path = "config/config.yaml") -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config YAML file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid (with detailed error message).
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw_config = yaml.safe_load(f) or {}

    return AppConfig.model_validate(raw_config)


def validate_config_dict(config_dict: dict[str, Any]) -> AppConfig:
    """Validate a configuration dictionary.

    Args:
        config_dict: Configuration as a dictionary.

    Returns:
        Validated AppConfig instance.

    Raises:
        pydantic.ValidationError: If config is invalid.
    """
    return AppConfig.model_validate(config_dict)


# =============================================================================
# EXPORTS
# =============================================================================

__all__ = [
    "AppConfig",
    "SettlementConfig",
    "LoggingConfig",
    "StrictModel",
    "load_validated_config",
    "validate_config_dict",
]
