"""On-demand status and log text for a single service."""

import logging
from datetime import datetime
from typing import Optional

from ..models.service import ServiceConfig, ServiceDetail
from ..utils.constants import DEFAULT_LOG_LINES
from .aggregator import StatusAggregator
from .unit_query import UnitQueryProvider

logger = logging.getLogger(__name__)


def fetch_detail(
    service_name: str,
    config: ServiceConfig,
    provider: UnitQueryProvider,
    boot_time: Optional[datetime] = None,
    log_lines: int = DEFAULT_LOG_LINES
) -> ServiceDetail:
    """Get status text, log text and live fields for one service.

    The status and log queries are all-or-nothing: if either fails, the
    QueryFailure propagates. Live fields are best-effort and left as
    None when they cannot be collected.

    Args:
        service_name: Unit to query
        config: Configuration of the service
        provider: Source of unit state
        boot_time: Boot time for uptime (looked up if not given)
        log_lines: Number of journal lines to include

    Returns:
        ServiceDetail for the service

    Raises:
        QueryFailure: If the status or log text cannot be fetched
    """
    status_text = provider.query_status_text(service_name)

    if config.show_logs:
        log_text = provider.query_log_text(service_name, log_lines)
    else:
        log_text = ""

    info = None
    try:
        result = StatusAggregator(provider).collect_service(config, [config], boot_time)
    except Exception:
        logger.exception(f"Unexpected error collecting live status for {service_name}")
    else:
        if result.ok:
            info = result.info
        else:
            logger.warning(f"Live status unavailable for {service_name}: {result.reason}")

    return ServiceDetail(config=config, status_text=status_text, log_text=log_text, info=info)
