"""Data models for systemd service status reporting."""

from .service import (
    AutoStartStatus,
    LoadState,
    ServiceConfig,
    ServiceDetail,
    ServiceInfo,
    ServiceResult,
    Unit,
)

__all__ = [
    "AutoStartStatus",
    "LoadState",
    "ServiceConfig",
    "ServiceDetail",
    "ServiceInfo",
    "ServiceResult",
    "Unit",
]
