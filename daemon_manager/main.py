#!/usr/bin/env python3
"""Entry point for the Daemon Manager dashboard server."""

import argparse
import logging
import os
import sys
from typing import Iterable, Tuple

import uvicorn

from .app import create_app
from .core.config_manager import ConfigManager
from .core.errors import ConfigError, QueryFailure
from .core.service_manager import SystemctlProvider
from .core.unit_query import UnitQueryProvider
from .models.service import ServiceConfig
from .utils.constants import (
    ADDR_ENV,
    APP_NAME,
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_FILE,
    DEFAULT_HOST,
    DEFAULT_PORT,
    LOG_FILE_ENV,
    LOG_LEVEL_ENV,
)

logger = logging.getLogger(__name__)


def setup_logging():
    """Set up application logging."""
    handlers = [logging.StreamHandler()]

    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    level = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()

    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    logger.info("=" * 60)
    logger.info(f"Starting {APP_NAME}")
    logger.info("=" * 60)


def parse_addr(addr: str) -> Tuple[str, int]:
    """Parse a 'host:port' listen address.

    Args:
        addr: Address such as '127.0.0.1:3000'

    Returns:
        Tuple of (host, port); the default address if addr is invalid
    """
    host, sep, port_str = addr.rpartition(":")
    try:
        port = int(port_str)
        if not sep or not host or not 0 < port < 65536:
            raise ValueError(f"invalid port or host in {addr!r}")
        return host, port
    except ValueError as e:
        logger.error(f"Could not parse address {addr}: {e}. Will use default {DEFAULT_HOST}:{DEFAULT_PORT}")
        return DEFAULT_HOST, DEFAULT_PORT


def check_units(services: Iterable[ServiceConfig], provider: UnitQueryProvider) -> bool:
    """Verify every configured unit exists and is loaded.

    Args:
        services: Configured services
        provider: Source of unit state

    Returns:
        True if every unit could be loaded, False otherwise
    """
    ok = True
    for service in services:
        try:
            provider.enumerate_unit(service.service_name)
        except QueryFailure as e:
            logger.error(str(e))
            ok = False
    return ok


def main(argv=None) -> int:
    """Main entry point."""
    setup_logging()

    parser = argparse.ArgumentParser(description=f"{APP_NAME} - Live status dashboard for systemd services")
    parser.add_argument('--config',
                        help=f'Path to the services file (default: ${CONFIG_PATH_ENV} or {DEFAULT_CONFIG_FILE})')
    parser.add_argument('--addr',
                        help=f'Listen address host:port (default: ${ADDR_ENV} or {DEFAULT_HOST}:{DEFAULT_PORT})')
    parser.add_argument('--skip-unit-check', action='store_true',
                        help='Start even if some configured units are missing or masked')
    args = parser.parse_args(argv)

    config_path = args.config or os.environ.get(CONFIG_PATH_ENV)
    if not config_path:
        logger.warning(f"{CONFIG_PATH_ENV} is not set. Will use default {DEFAULT_CONFIG_FILE}")
        config_path = DEFAULT_CONFIG_FILE

    try:
        config = ConfigManager(config_path).load_config()
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    provider = SystemctlProvider.from_settings(config.settings)

    if not args.skip_unit_check and not check_units(config.services, provider):
        logger.error("Erroneous services found. Exiting")
        return 1

    addr = args.addr or os.environ.get(ADDR_ENV)
    if not addr:
        logger.warning(f"{ADDR_ENV} is not set. Will use default {DEFAULT_HOST}:{DEFAULT_PORT}")
        addr = f"{DEFAULT_HOST}:{DEFAULT_PORT}"
    host, port = parse_addr(addr)

    app = create_app(config, provider)

    logger.info(f"Listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
