"""Core functionality for systemd service status reporting."""

from .aggregator import StatusAggregator, aggregate
from .config_manager import ConfigManager, DashboardConfig, DashboardSettings
from .detail import fetch_detail
from .service_manager import SystemctlProvider
from .unit_query import UnitQueryProvider

__all__ = [
    "ConfigManager",
    "DashboardConfig",
    "DashboardSettings",
    "StatusAggregator",
    "SystemctlProvider",
    "UnitQueryProvider",
    "aggregate",
    "fetch_detail",
]
