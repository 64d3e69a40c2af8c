"""Pydantic configuration schemas for SocialNet."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from models.enums import RecordFormat


class StorageConfig(BaseModel):
    """Configuration for the flat-file record store."""

    data_dir: str = Field(default=".", description="Directory holding the record files")
    users_file: str = Field(default="users.txt")
    posts_file: str = Field(default="posts.txt")
    record_format: RecordFormat = Field(
        default=RecordFormat.ESCAPED,
        description="escaped allows newlines in fields, plain matches the legacy byte format",
    )
    atomic_writes: bool = Field(default=True, description="Write to a temp file then replace")
    encoding: str = Field(default="utf-8")


class ActivityLogConfig(BaseModel):
    """Configuration for the append-only activity log."""

    enabled: bool = Field(default=False)
    log_dir: str = Field(default="logs")
    buffer_size: int = Field(default=50, ge=1, le=10000)
    use_compression: bool = Field(default=False)


class AppConfig(BaseModel):
    """Main application configuration."""

    name: str = Field(default="socialnet")
    storage: StorageConfig = Field(default_factory=StorageConfig)
    activity_log: ActivityLogConfig = Field(default_factory=ActivityLogConfig)

    save_on_exit: bool = Field(default=True, description="Also save when leaving the main menu")
    check_integrity: bool = Field(default=True, description="Report inconsistent friendships after load")
    log_level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def load_config(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AppConfig:
    """Load configuration from a YAML file and apply overrides.

    Args:
        config_path: YAML file to read, or None for defaults
        overrides: Nested values that take precedence over the file

    Returns:
        Validated AppConfig
    """
    config_dict: dict[str, Any] = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path) as f:
            config_dict = yaml.safe_load(f) or {}

    if overrides:
        config_dict = _deep_merge(config_dict, overrides)

    return AppConfig(**config_dict)


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
