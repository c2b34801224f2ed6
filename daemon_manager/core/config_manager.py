"""Configuration manager for loading the monitored service list."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from ..models.service import ServiceConfig
from ..utils.constants import (
    DEFAULT_LOG_LINES,
    DEFAULT_QUERY_TIMEOUT,
    JOURNALCTL_PATH,
    SYSTEMCTL_PATH,
)
from .errors import ConfigError
from .resolver import find_service_config

logger = logging.getLogger(__name__)

TOP_LEVEL_KEYS = {"version", "services", "settings"}
SERVICE_KEYS = {"service_name", "friendly_name", "show_logs"}


@dataclass(frozen=True)
class DashboardSettings:
    """Tunables for querying systemd.

    Attributes:
        query_timeout: Seconds to wait for each systemctl/journalctl call
        log_lines: Journal lines shown in service details
        max_workers: Cap on concurrent queries (None: one per service)
        systemctl_path: systemctl executable
        journalctl_path: journalctl executable
        user_mode: Query the user manager instead of the system manager
    """

    query_timeout: float = DEFAULT_QUERY_TIMEOUT
    log_lines: int = DEFAULT_LOG_LINES
    max_workers: Optional[int] = None
    systemctl_path: str = SYSTEMCTL_PATH
    journalctl_path: str = JOURNALCTL_PATH
    user_mode: bool = False


@dataclass(frozen=True)
class DashboardConfig:
    """Loaded configuration; shared read-only by every request."""

    services: Tuple[ServiceConfig, ...]
    settings: DashboardSettings = field(default_factory=DashboardSettings)

    def get_service(self, name: str) -> Optional[ServiceConfig]:
        """Get a service by unit name or base name.

        Args:
            name: 'nginx.service' or 'nginx'

        Returns:
            ServiceConfig if found, None otherwise
        """
        return find_service_config(name, self.services)


class ConfigManager:
    """Loads and validates the service configuration file."""

    CONFIG_VERSION = "1.0"

    def __init__(self, config_path: Union[str, Path]):
        """Initialize the config manager.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)

    def load_config(self) -> DashboardConfig:
        """Load configuration from file.

        Returns:
            Validated DashboardConfig

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Could not read configuration file '{self.config_path}': {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parsing error in '{self.config_path}': {e}") from e

        config = self.parse_config(data)
        logger.info(f"Loaded {len(config.services)} services from {self.config_path}")
        return config

    @classmethod
    def parse_config(cls, data: Any) -> DashboardConfig:
        """Build a DashboardConfig from parsed YAML data.

        Args:
            data: Configuration dictionary

        Returns:
            Validated DashboardConfig
        """
        cls._validate_config(data)

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        services = tuple(cls._load_service(entry) for entry in data["services"])
        cls._check_unique_base_names(services)

        settings = cls._load_settings(data.get("settings") or {})
        return DashboardConfig(services=services, settings=settings)

    @staticmethod
    def _validate_config(data: Any):
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary
        """
        if not isinstance(data, dict):
            raise ConfigError("Config must be a dictionary")

        unknown = set(data) - TOP_LEVEL_KEYS
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        services = data.get("services")
        if not isinstance(services, list) or not services:
            raise ConfigError("Services must be a non-empty list")

        if "settings" in data and data["settings"] is not None and not isinstance(data["settings"], dict):
            raise ConfigError("Settings must be a dictionary")

    @staticmethod
    def _load_service(entry: Any) -> ServiceConfig:
        """Validate and convert one service entry."""
        if not isinstance(entry, dict):
            raise ConfigError(f"Service entry must be a dictionary, got: {entry!r}")

        unknown = set(entry) - SERVICE_KEYS
        if unknown:
            raise ConfigError(f"Unknown keys in service entry: {', '.join(sorted(unknown))}")

        for key in ("service_name", "friendly_name"):
            if not isinstance(entry.get(key), str):
                raise ConfigError(f"Service entry is missing '{key}': {entry!r}")

        if not isinstance(entry.get("show_logs", False), bool):
            raise ConfigError(f"show_logs must be true or false for {entry['service_name']}")

        try:
            return ServiceConfig.from_dict(entry)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @staticmethod
    def _check_unique_base_names(services: Tuple[ServiceConfig, ...]):
        """Reject configurations where two services share a base name."""
        seen: Dict[str, str] = {}
        for service in services:
            if service.base_name in seen:
                raise ConfigError(
                    f"Services {seen[service.base_name]} and {service.service_name} "
                    f"share the base name '{service.base_name}'"
                )
            seen[service.base_name] = service.service_name

    @staticmethod
    def _load_settings(data: Dict[str, Any]) -> DashboardSettings:
        """Validate settings, filling in defaults for missing keys."""
        defaults = DashboardSettings()
        unknown = set(data) - set(defaults.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")

        query_timeout = data.get("query_timeout", defaults.query_timeout)
        if isinstance(query_timeout, bool) or not isinstance(query_timeout, (int, float)) or query_timeout <= 0:
            raise ConfigError("query_timeout must be a positive number")

        for key in ("log_lines", "max_workers"):
            value = data.get(key)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
                raise ConfigError(f"{key} must be a positive integer")

        for key in ("systemctl_path", "journalctl_path"):
            value = data.get(key)
            if value is not None and (not isinstance(value, str) or not value):
                raise ConfigError(f"{key} must be a non-empty string")

        user_mode = data.get("user_mode", defaults.user_mode)
        if not isinstance(user_mode, bool):
            raise ConfigError("user_mode must be true or false")

        return DashboardSettings(
            query_timeout=query_timeout,
            log_lines=data.get("log_lines") or defaults.log_lines,
            max_workers=data.get("max_workers"),
            systemctl_path=data.get("systemctl_path") or defaults.systemctl_path,
            journalctl_path=data.get("journalctl_path") or defaults.journalctl_path,
            user_mode=user_mode,
        )
