"""Tests for the systemctl/journalctl adapter."""

import subprocess
from unittest.mock import patch

import pytest

from daemon_manager.core.errors import (
    ManagerUnavailable,
    OutputDecodeError,
    PropertyNotFound,
    QueryTimeout,
    UnitCreationFailure,
)
from daemon_manager.core.service_manager import SystemctlProvider
from daemon_manager.models.service import AutoStartStatus, LoadState

SHOW_NGINX = (
    b"Id=nginx.service\n"
    b"LoadState=loaded\n"
    b"ActiveState=active\n"
    b"SubState=running\n"
    b"UnitFileState=enabled-runtime\n"
)


def _completed(stdout=b"", returncode=0, stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_query_property_returns_trimmed_value():
    provider = SystemctlProvider(timeout=3)
    with patch("subprocess.run", return_value=_completed(b"1234\n")) as mock_run:
        assert provider.query_property("nginx.service", "MainPID") == "1234"

    cmd = mock_run.call_args.args[0]
    assert cmd == ["systemctl", "show", "nginx.service", "--property", "MainPID", "--value"]
    assert mock_run.call_args.kwargs["timeout"] == 3


def test_query_property_user_mode():
    provider = SystemctlProvider(user_mode=True, systemctl_path="/run/current-system/sw/bin/systemctl")
    with patch("subprocess.run", return_value=_completed(b"0\n")) as mock_run:
        provider.query_property("syncthing.service", "MainPID")

    assert mock_run.call_args.args[0][:2] == ["/run/current-system/sw/bin/systemctl", "--user"]


def test_query_property_empty_value_is_not_found():
    with patch("subprocess.run", return_value=_completed(b"\n")):
        with pytest.raises(PropertyNotFound) as exc_info:
            SystemctlProvider().query_property("nginx.service", "StatusErrno")
    assert exc_info.value.property_name == "StatusErrno"


def test_query_property_nonzero_exit_is_manager_unavailable():
    error = subprocess.CalledProcessError(1, ["systemctl"], output=b"", stderr=b"Failed to connect to bus")
    with patch("subprocess.run", side_effect=error):
        with pytest.raises(ManagerUnavailable, match="Failed to connect to bus"):
            SystemctlProvider().query_property("nginx.service", "MainPID")


def test_missing_executable_is_manager_unavailable():
    with patch("subprocess.run", side_effect=FileNotFoundError("systemctl")):
        with pytest.raises(ManagerUnavailable):
            SystemctlProvider().query_property("nginx.service", "MainPID")


def test_timeout_is_query_timeout():
    with patch("subprocess.run", side_effect=subprocess.TimeoutExpired(["systemctl"], 10)):
        with pytest.raises(QueryTimeout):
            SystemctlProvider().query_property("nginx.service", "MainPID")


def test_non_utf8_output_is_decode_error():
    with patch("subprocess.run", return_value=_completed(b"\xff\xfe")):
        with pytest.raises(OutputDecodeError):
            SystemctlProvider().query_property("nginx.service", "MainPID")


def test_enumerate_unit_parses_show_output():
    with patch("subprocess.run", return_value=_completed(SHOW_NGINX)):
        unit = SystemctlProvider().enumerate_unit("nginx.service")

    assert unit.name == "nginx"
    assert unit.load_state is LoadState.LOADED
    assert unit.active is True
    assert unit.auto_start is AutoStartStatus.ENABLED_RUNTIME
    assert unit.status_label == "active (running)"


def test_enumerate_unit_uses_reported_id():
    output = SHOW_NGINX.replace(b"Id=nginx.service", b"Id=openresty.service")
    with patch("subprocess.run", return_value=_completed(output)):
        assert SystemctlProvider().enumerate_unit("nginx.service").name == "openresty"


@pytest.mark.parametrize("load_state", [b"masked", b"not-found"])
def test_enumerate_unit_rejects_unloaded(load_state):
    output = SHOW_NGINX.replace(b"LoadState=loaded", b"LoadState=" + load_state)
    with patch("subprocess.run", return_value=_completed(output)):
        with pytest.raises(UnitCreationFailure, match="not loaded"):
            SystemctlProvider().enumerate_unit("nginx.service")


def test_enumerate_unit_wraps_query_failures():
    with patch("subprocess.run", side_effect=FileNotFoundError("systemctl")):
        with pytest.raises(UnitCreationFailure) as exc_info:
            SystemctlProvider().enumerate_unit("nginx.service")
    assert isinstance(exc_info.value.__cause__, ManagerUnavailable)


def test_status_text_tolerates_inactive_exit_code():
    output = b"\x1b[0;1;31m\xe2\x97\x8f\x1b[0m nginx.service - A <web> server\n"
    with patch("subprocess.run", return_value=_completed(output, returncode=3)) as mock_run:
        html = SystemctlProvider().query_status_text("nginx.service")

    assert "&lt;web&gt;" in html
    assert "\x1b" not in html
    assert mock_run.call_args.kwargs["check"] is False
    assert mock_run.call_args.kwargs["env"]["SYSTEMD_COLORS"] == "1"


def test_status_text_empty_output_is_failure():
    with patch("subprocess.run", return_value=_completed(b"", returncode=4, stderr=b"Unit x.service could not be found.")):
        with pytest.raises(ManagerUnavailable):
            SystemctlProvider().query_status_text("x.service")


def test_log_text_command():
    with patch("subprocess.run", return_value=_completed(b"Mar 01 started\n")) as mock_run:
        html = SystemctlProvider(journalctl_path="journalctl").query_log_text("nginx.service", 20)

    assert "Mar 01 started" in html
    assert mock_run.call_args.args[0] == ["journalctl", "-u", "nginx.service", "--no-pager", "--lines", "20"]
