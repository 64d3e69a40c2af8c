"""Configuration module for SocialNet."""

from .schemas import (
    AppConfig,
    StorageConfig,
    ActivityLogConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "StorageConfig",
    "ActivityLogConfig",
    "load_config",
]
