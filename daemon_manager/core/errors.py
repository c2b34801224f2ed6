"""Exception hierarchy for service manager queries and configuration."""

from typing import Optional


class DaemonManagerError(Exception):
    """Base class for all daemon manager errors."""


class QueryFailure(DaemonManagerError):
    """An external query against the service manager failed.

    Attributes:
        unit: Unit the query was issued for (if known)
        property_name: Property being queried (if any)
    """

    def __init__(self, message: str, unit: Optional[str] = None, property_name: Optional[str] = None):
        super().__init__(message)
        self.unit = unit
        self.property_name = property_name


class ManagerUnavailable(QueryFailure):
    """The manager executable is missing or exited with an error."""


class PropertyNotFound(QueryFailure):
    """The manager answered but reported no value for the property."""


class QueryTimeout(QueryFailure):
    """The external call did not finish within its bounded wait."""


class OutputDecodeError(QueryFailure):
    """The external call produced output that is not valid UTF-8."""


class UnitCreationFailure(QueryFailure):
    """The unit could not be located, or it is masked."""


class ResolutionFailure(DaemonManagerError):
    """No configured service matches a manager-reported unit."""

    def __init__(self, unit_name: str):
        super().__init__(f"No configured service matches unit '{unit_name}'")
        self.unit_name = unit_name


class MandatoryFieldFailure(DaemonManagerError):
    """A field required to build a status record is missing or unparseable."""

    def __init__(self, unit: str, property_name: str, reason: str):
        super().__init__(f"Mandatory property {property_name} unavailable for {unit}: {reason}")
        self.unit = unit
        self.property_name = property_name


class ConfigError(DaemonManagerError, ValueError):
    """The configuration file is missing, malformed or inconsistent."""
