"""Service manager adapter that queries systemd via systemctl and journalctl."""

import logging
import os
import subprocess
from typing import Dict, List, Optional

from ..models.service import AutoStartStatus, LoadState, Unit
from ..utils.constants import (
    DEFAULT_LOG_LINES,
    DEFAULT_QUERY_TIMEOUT,
    JOURNALCTL_PATH,
    SYSTEMCTL_PATH,
    UNIT_PROPERTIES,
)
from ..utils.markup import ansi_to_html
from .errors import (
    ManagerUnavailable,
    OutputDecodeError,
    PropertyNotFound,
    QueryFailure,
    QueryTimeout,
    UnitCreationFailure,
)
from .unit_query import UnitQueryProvider

logger = logging.getLogger(__name__)


class SystemctlProvider(UnitQueryProvider):
    """Queries systemd units by running systemctl and journalctl."""

    def __init__(
        self,
        timeout: float = DEFAULT_QUERY_TIMEOUT,
        systemctl_path: str = SYSTEMCTL_PATH,
        journalctl_path: str = JOURNALCTL_PATH,
        user_mode: bool = False
    ):
        """Initialize the provider.

        Args:
            timeout: Seconds to wait for each external call
            systemctl_path: systemctl executable
            journalctl_path: journalctl executable
            user_mode: Query the user manager (--user) instead of the system manager
        """
        self.timeout = timeout
        self.systemctl_path = systemctl_path
        self.journalctl_path = journalctl_path
        self.user_mode = user_mode

    @classmethod
    def from_settings(cls, settings) -> 'SystemctlProvider':
        """Create a provider from loaded DashboardSettings."""
        return cls(
            timeout=settings.query_timeout,
            systemctl_path=settings.systemctl_path,
            journalctl_path=settings.journalctl_path,
            user_mode=settings.user_mode,
        )

    def query_property(self, unit: str, property_name: str) -> str:
        """Get one property value via `systemctl show --value`.

        Args:
            unit: Unit identifier
            property_name: systemd property name

        Returns:
            Property value with trailing whitespace removed
        """
        cmd = self._systemctl_cmd("show", unit, "--property", property_name, "--value")
        value = self._run(cmd, unit, property_name).rstrip()

        if not value:
            raise PropertyNotFound(
                f"No value for {property_name} on {unit}", unit=unit, property_name=property_name
            )

        return value

    def query_status_text(self, unit: str) -> str:
        """Get `systemctl status` output as HTML.

        systemctl exits non-zero for inactive units, so only an empty
        report is treated as a failure.

        Args:
            unit: Unit identifier

        Returns:
            Status report converted to HTML
        """
        cmd = self._systemctl_cmd(
            "status", unit, "--no-pager", "--lines", "0", "--full", "--legend=no"
        )
        env = dict(os.environ, SYSTEMD_COLORS="1")
        raw = self._run(cmd, unit, check=False, env=env)

        if not raw.strip():
            raise ManagerUnavailable(f"systemctl status returned no output for {unit}", unit=unit)

        return ansi_to_html(raw)

    def query_log_text(self, unit: str, max_lines: int = DEFAULT_LOG_LINES) -> str:
        """Get recent journal lines as HTML.

        Args:
            unit: Unit identifier
            max_lines: Number of log lines to retrieve

        Returns:
            Log output converted to HTML (may be empty)
        """
        cmd = [self.journalctl_path]
        if self.user_mode:
            cmd.append("--user")

        cmd.extend(["-u", unit, "--no-pager", "--lines", str(max_lines)])

        return ansi_to_html(self._run(cmd, unit))

    def enumerate_unit(self, service_name: str) -> Unit:
        """Load the live state of a unit with a single `systemctl show` call.

        Args:
            service_name: Configured unit identifier

        Returns:
            Unit with its base name as reported by systemd
        """
        cmd = self._systemctl_cmd("show", service_name, f"--property={','.join(UNIT_PROPERTIES)}")

        try:
            output = self._run(cmd, service_name)
        except QueryFailure as e:
            raise UnitCreationFailure(
                f"Failed to create unit for {service_name}: {e}", unit=service_name
            ) from e

        props = self._parse_properties(output)

        load_state_str = props.get("LoadState", "")
        if LoadState.from_string(load_state_str) != LoadState.LOADED:
            raise UnitCreationFailure(
                f"Unit {service_name} is not loaded ({load_state_str or 'unknown'})",
                unit=service_name,
            )

        unit_id = props.get("Id") or service_name
        active_state = props.get("ActiveState", "unknown")

        return Unit(
            name=unit_id.rsplit(".", 1)[0],
            load_state=LoadState.LOADED,
            active=active_state == "active",
            auto_start=AutoStartStatus.from_string(props.get("UnitFileState", "")),
            active_state=active_state,
            sub_state=props.get("SubState", ""),
        )

    def _systemctl_cmd(self, *args: str) -> List[str]:
        """Build a systemctl command line."""
        cmd = [self.systemctl_path]
        if self.user_mode:
            cmd.append("--user")

        cmd.extend(args)
        return cmd

    @staticmethod
    def _parse_properties(output: str) -> Dict[str, str]:
        """Parse `Key=Value` lines from systemctl show."""
        props = {}
        for line in output.splitlines():
            key, sep, value = line.partition("=")
            if sep:
                props[key.strip()] = value.strip()
        return props

    def _run(
        self,
        cmd: List[str],
        unit: str,
        property_name: Optional[str] = None,
        check: bool = True,
        env: Optional[Dict[str, str]] = None
    ) -> str:
        """Run an external command and return its stdout as text.

        Args:
            cmd: Command line
            unit: Unit the command is about (for error context)
            property_name: Property being queried (for error context)
            check: Treat a non-zero exit as a failure
            env: Environment for the child process

        Returns:
            Decoded standard output
        """
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
                check=check,
                env=env
            )

        except FileNotFoundError as e:
            raise ManagerUnavailable(
                f"{cmd[0]} not found: {e}", unit=unit, property_name=property_name
            ) from e
        except subprocess.TimeoutExpired as e:
            raise QueryTimeout(
                f"Timeout after {self.timeout}s running {cmd[0]} for {unit}",
                unit=unit,
                property_name=property_name,
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            raise ManagerUnavailable(
                f"{cmd[0]} failed (status: {e.returncode}): {stderr}",
                unit=unit,
                property_name=property_name,
            ) from e
        except OSError as e:
            raise ManagerUnavailable(
                f"Could not run {cmd[0]}: {e}", unit=unit, property_name=property_name
            ) from e

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise OutputDecodeError(
                f"{cmd[0]} output for {unit} contains non-UTF-8 characters",
                unit=unit,
                property_name=property_name,
            ) from e
