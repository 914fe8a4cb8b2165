"""Configuration for ktool, read from the environment and an optional YAML file."""

from .provider import (
    CollectorConfig,
    ConfigProvider,
    EnvConfigProvider,
    LoggingConfig,
    UpdateConfig,
)

__all__ = [
    "CollectorConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "LoggingConfig",
    "UpdateConfig",
]
