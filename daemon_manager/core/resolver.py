"""Matching of systemd units back to configured services."""

from typing import Iterable, Optional

from ..models.service import ServiceConfig
from .errors import ResolutionFailure


def resolve_service_config(unit_name: str, configs: Iterable[ServiceConfig]) -> ServiceConfig:
    """Find the configured service whose base name equals a unit's base name.

    Args:
        unit_name: Unit base name as reported by systemd (e.g., 'nginx')
        configs: Configured services

    Returns:
        First matching ServiceConfig

    Raises:
        ResolutionFailure: If no configured service matches
    """
    for config in configs:
        if config.base_name == unit_name:
            return config

    raise ResolutionFailure(unit_name)


def find_service_config(name: str, configs: Iterable[ServiceConfig]) -> Optional[ServiceConfig]:
    """Look up a service by full unit name, falling back to its base name.

    Args:
        name: 'nginx.service' or 'nginx'
        configs: Configured services

    Returns:
        ServiceConfig if found, None otherwise
    """
    configs = list(configs)

    for config in configs:
        if config.service_name == name:
            return config

    try:
        return resolve_service_config(name, configs)
    except ResolutionFailure:
        return None
