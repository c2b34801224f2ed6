"""Data models for systemd service status reporting."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ServiceInfo keys flattened into ServiceDetail.to_dict()
LIVE_FIELDS = ("status", "active", "enabled", "running", "pid", "status_code", "uptime")


class LoadState(Enum):
    """Whether systemd has the unit loaded."""

    LOADED = "loaded"
    MASKED = "masked"

    @classmethod
    def from_string(cls, state_str: str) -> 'LoadState':
        """Convert a LoadState value from systemctl to LoadState.

        Anything other than 'loaded' ('masked', 'not-found', 'error', ...)
        means the unit cannot be reported on.

        Args:
            state_str: LoadState string from systemctl

        Returns:
            LoadState enum value
        """
        if state_str.strip().lower() == "loaded":
            return cls.LOADED
        return cls.MASKED


class AutoStartStatus(Enum):
    """Whether a unit starts automatically at boot."""

    ENABLED = "enabled"
    ENABLED_RUNTIME = "enabled-runtime"
    DISABLED = "disabled"
    OTHER = "other"

    @classmethod
    def from_string(cls, state_str: str) -> 'AutoStartStatus':
        """Convert a UnitFileState value to AutoStartStatus.

        Args:
            state_str: UnitFileState string from systemctl

        Returns:
            AutoStartStatus enum value (OTHER for static, masked, etc.)
        """
        try:
            return cls(state_str.strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ServiceConfig:
    """Configuration for a monitored systemd service.

    Attributes:
        service_name: Systemd unit identifier including its type suffix (e.g., 'nginx.service')
        friendly_name: Label shown on the dashboard
        show_logs: Whether journal output may be shown for this service
    """

    service_name: str
    friendly_name: str
    show_logs: bool = False

    def __post_init__(self):
        """Validate service configuration after initialization."""
        if not self.service_name:
            raise ValueError("Service name cannot be empty")

        if "." not in self.service_name:
            raise ValueError(f"Invalid service name: {self.service_name}. Must include a unit type suffix")

        if not self.friendly_name:
            raise ValueError(f"Friendly name cannot be empty for {self.service_name}")

    @property
    def base_name(self) -> str:
        """Unit identifier without its type suffix ('nginx.service' -> 'nginx')."""
        return self.service_name.rsplit(".", 1)[0]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the service config
        """
        return {
            "service_name": self.service_name,
            "friendly_name": self.friendly_name,
            "show_logs": self.show_logs,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ServiceConfig':
        """Create ServiceConfig from dictionary.

        Args:
            data: Dictionary with service configuration

        Returns:
            ServiceConfig instance
        """
        return cls(
            service_name=data["service_name"],
            friendly_name=data["friendly_name"],
            show_logs=data.get("show_logs", False),
        )


@dataclass(frozen=True)
class Unit:
    """Live state of one unit as reported by systemd.

    Attributes:
        name: Unit base name (identifier without the type suffix)
        load_state: Whether the unit is loaded
        active: True if ActiveState is 'active'
        auto_start: Boot-time enablement
        active_state: Raw ActiveState (e.g., 'active', 'failed')
        sub_state: Raw SubState (e.g., 'running', 'dead')
    """

    name: str
    load_state: LoadState
    active: bool
    auto_start: AutoStartStatus
    active_state: str = "unknown"
    sub_state: str = "unknown"

    @property
    def status_label(self) -> str:
        """Human-readable state, e.g. 'active (running)'."""
        if self.sub_state:
            return f"{self.active_state} ({self.sub_state})"
        return self.active_state


@dataclass
class ServiceInfo:
    """Runtime information about a service.

    Attributes:
        config: Service configuration
        status: State label reported by systemd
        active: Whether the unit is active
        enabled: Whether the unit starts at boot (persistently or for this boot)
        running: Whether the unit has a live main process
        pid: Main process id (if reported)
        status_code: Last exit/error code, only when not running
        uptime: Time since the main process started (e.g., '2h 34m 5s')
    """

    config: ServiceConfig
    status: str
    active: bool
    enabled: bool
    running: bool
    pid: Optional[int] = None
    status_code: Optional[int] = None
    uptime: str = ""

    @classmethod
    def from_unit(
        cls,
        config: ServiceConfig,
        unit: Unit,
        pid: Optional[int],
        status_code: Optional[int],
        uptime: str
    ) -> 'ServiceInfo':
        """Derive the dashboard record from raw unit state.

        Args:
            config: Matching service configuration
            unit: Live unit state
            pid: MainPID if it could be read
            status_code: StatusErrno if it could be read
            uptime: Formatted uptime string

        Returns:
            ServiceInfo instance
        """
        running = pid is not None and pid != 0
        return cls(
            config=config,
            status=unit.status_label,
            active=unit.active,
            enabled=unit.auto_start in (AutoStartStatus.ENABLED, AutoStartStatus.ENABLED_RUNTIME),
            running=running,
            pid=pid,
            status_code=None if running else status_code,
            uptime=uptime,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary representation of the service info
        """
        return {
            "config": self.config.to_dict(),
            "status": self.status,
            "active": self.active,
            "enabled": self.enabled,
            "running": self.running,
            "pid": self.pid,
            "status_code": self.status_code,
            "uptime": self.uptime,
        }


@dataclass
class ServiceDetail:
    """Status and log text for a single service.

    Attributes:
        config: Service configuration
        status_text: `systemctl status` output as HTML
        log_text: Journal output as HTML, empty when logs are disabled
        info: Live status fields, None if they could not be collected
    """

    config: ServiceConfig
    status_text: str
    log_text: str = ""
    info: Optional[ServiceInfo] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization.

        Returns:
            Dictionary with the live fields flattened next to the text fields
        """
        result = {"config": self.config.to_dict()}
        if self.info is not None:
            result.update(self.info.to_dict())
        else:
            # Keep the response shape stable when live fields are unavailable
            result.update(dict.fromkeys(LIVE_FIELDS))
        result["status_text"] = self.status_text
        result["log_text"] = self.log_text
        return result


@dataclass
class ServiceResult:
    """Outcome of collecting one service during aggregation.

    Either `info` is set, or the service was skipped and `reason` says why.
    """

    service_name: str
    info: Optional[ServiceInfo] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.info is not None

    @classmethod
    def success(cls, info: ServiceInfo) -> 'ServiceResult':
        return cls(service_name=info.config.service_name, info=info)

    @classmethod
    def skipped(cls, service_name: str, reason: str) -> 'ServiceResult':
        return cls(service_name=service_name, reason=reason)
