"""Daemon Manager - live status dashboard for systemd services."""

from .utils.constants import APP_VERSION

__version__ = APP_VERSION
