"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import yaml

from ktool.errors import ConfigError

DEFAULT_CONFIG_PATH = "~/.config/ktool/config.yaml"
DEFAULT_RELEASES_URL = "https://api.github.com/repos/PaloAltoNetworks/ktool/releases/latest"
DEFAULT_INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/PaloAltoNetworks/ktool/main/install.sh"


@dataclass
class CollectorConfig:
    """Support bundle collection configuration."""
    command_timeout: int
    kubectl_binary: str
    helm_binary: str


@dataclass
class UpdateConfig:
    """Self-update configuration."""
    enabled: bool
    releases_url: str
    install_script_url: str
    check_timeout: int


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_collector_config(self) -> CollectorConfig:
        """Get collection configuration."""
        ...

    def get_update_config(self) -> UpdateConfig:
        """Get self-update configuration."""
        ...

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration."""
        ...


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).lower() in ("1", "true", "yes", "on")


class EnvConfigProvider:
    """
    Environment-based configuration provider.

    Values are seeded from a YAML file (``KTOOL_CONFIG``, default
    ``~/.config/ktool/config.yaml``) and overridden by environment variables.
    A missing file is not an error.

    Example file:

        collector:
          commandTimeout: 120
        update:
          enabled: false
        logging:
          level: DEBUG
    """

    def __init__(self, config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None):
        self.environ = os.environ if environ is None else environ
        path = config_path or self.environ.get("KTOOL_CONFIG", DEFAULT_CONFIG_PATH)
        self.config_path = Path(path).expanduser()
        self._file_config = self._load_file()

    def _load_file(self) -> Dict[str, Any]:
        if not self.config_path.is_file():
            return {}
        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config file {self.config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_path} must contain a mapping")
        return data

    def _get(self, section: str, key: str, env_var: str, default: Any) -> Any:
        if env_var in self.environ:
            return self.environ[env_var]
        return (self._file_config.get(section) or {}).get(key, default)

    def _get_int(self, section: str, key: str, env_var: str, default: int) -> int:
        value = self._get(section, key, env_var, default)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{key} must be an integer: {value!r}") from e

    def get_collector_config(self) -> CollectorConfig:
        """Get collection configuration from environment variables."""
        return CollectorConfig(
            command_timeout=self._get_int("collector", "commandTimeout", "KTOOL_COMMAND_TIMEOUT", 60),
            kubectl_binary=self._get("collector", "kubectl", "KTOOL_KUBECTL", "kubectl"),
            helm_binary=self._get("collector", "helm", "KTOOL_HELM", "helm"),
        )

    def get_update_config(self) -> UpdateConfig:
        """Get self-update configuration from environment variables."""
        return UpdateConfig(
            enabled=_as_bool(self._get("update", "enabled", "KTOOL_UPDATE_CHECK", True)),
            releases_url=self._get("update", "releasesUrl", "KTOOL_RELEASES_URL", DEFAULT_RELEASES_URL),
            install_script_url=self._get(
                "update", "installScriptUrl", "KTOOL_INSTALL_SCRIPT_URL", DEFAULT_INSTALL_SCRIPT_URL
            ),
            check_timeout=self._get_int("update", "checkTimeout", "KTOOL_UPDATE_TIMEOUT", 3),
        )

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig(level=str(self._get("logging", "level", "KTOOL_LOG_LEVEL", "INFO")).upper())
