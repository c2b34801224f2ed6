"""Shared fixtures for daemon_manager tests."""

from datetime import datetime, timezone

import pytest

from daemon_manager.core.errors import PropertyNotFound, UnitCreationFailure
from daemon_manager.core.unit_query import UnitQueryProvider
from daemon_manager.models.service import AutoStartStatus, LoadState, ServiceConfig, Unit

BOOT_TIME = datetime(2026, 1, 1, tzinfo=timezone.utc)


class FakeProvider(UnitQueryProvider):
    """In-memory UnitQueryProvider.

    Values may be exceptions, which are raised instead of returned.
    """

    def __init__(self, units=None, properties=None, status_texts=None, log_texts=None):
        self.units = units or {}
        self.properties = properties or {}
        self.status_texts = status_texts or {}
        self.log_texts = log_texts or {}
        self.log_calls = []

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def query_property(self, unit, property_name):
        if (unit, property_name) not in self.properties:
            raise PropertyNotFound(f"No value for {property_name}", unit=unit, property_name=property_name)
        return self._answer(self.properties[(unit, property_name)])

    def query_status_text(self, unit):
        return self._answer(self.status_texts.get(unit, ""))

    def query_log_text(self, unit, max_lines=100):
        self.log_calls.append((unit, max_lines))
        return self._answer(self.log_texts.get(unit, ""))

    def enumerate_unit(self, service_name):
        if service_name not in self.units:
            raise UnitCreationFailure(f"Unit {service_name} is not loaded (not-found)", unit=service_name)
        return self._answer(self.units[service_name])

    def add_service(self, service_name, pid="1234", errno="0", start_us="5000000",
                    active_state="active", sub_state="running", unit_file_state="enabled", unit_name=None):
        """Register a loaded unit with typical property values."""
        self.units[service_name] = Unit(
            name=unit_name or service_name.rsplit(".", 1)[0],
            load_state=LoadState.LOADED,
            active=active_state == "active",
            auto_start=AutoStartStatus.from_string(unit_file_state),
            active_state=active_state,
            sub_state=sub_state,
        )
        for prop, value in (("MainPID", pid), ("StatusErrno", errno),
                            ("ExecMainStartTimestampMonotonic", start_us)):
            if value is not None:
                self.properties[(service_name, prop)] = value


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def configs():
    return [
        ServiceConfig("nginx.service", "Web server", show_logs=True),
        ServiceConfig("postgresql.service", "Database"),
        ServiceConfig("backup.timer", "Nightly backup"),
    ]


@pytest.fixture(autouse=True)
def fixed_boot_time(monkeypatch):
    """Avoid reading the host's boot time."""
    monkeypatch.setattr("daemon_manager.core.aggregator.get_boot_time", lambda: BOOT_TIME)
    return BOOT_TIME
