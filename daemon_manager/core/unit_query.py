"""Query contract between the status core and the service manager."""

from abc import ABC, abstractmethod

from ..models.service import Unit
from ..utils.constants import DEFAULT_LOG_LINES


class UnitQueryProvider(ABC):
    """Read-only access to systemd unit state.

    Every method may raise a QueryFailure subclass (see core.errors):
    ManagerUnavailable, PropertyNotFound, QueryTimeout or OutputDecodeError.
    No method changes system state.
    """

    @abstractmethod
    def query_property(self, unit: str, property_name: str) -> str:
        """Get the current value of one unit property.

        Args:
            unit: Unit identifier (with or without type suffix)
            property_name: systemd property, e.g. 'MainPID'

        Returns:
            Property value as text, trailing whitespace removed
        """

    @abstractmethod
    def query_status_text(self, unit: str) -> str:
        """Get the human-readable status report of a unit as HTML."""

    @abstractmethod
    def query_log_text(self, unit: str, max_lines: int = DEFAULT_LOG_LINES) -> str:
        """Get the most recent journal lines of a unit as HTML."""

    @abstractmethod
    def enumerate_unit(self, service_name: str) -> Unit:
        """Resolve a configured service name to its live Unit.

        Raises:
            UnitCreationFailure: If the unit is not found, masked, or cannot be queried
        """
