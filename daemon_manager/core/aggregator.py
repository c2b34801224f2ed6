"""Aggregation of live status for all configured services."""

import concurrent.futures
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from ..models.service import ServiceConfig, ServiceInfo, ServiceResult
from ..utils.constants import PROP_MAIN_PID, PROP_START_TIMESTAMP, PROP_STATUS_ERRNO
from .errors import MandatoryFieldFailure, QueryFailure, ResolutionFailure
from .resolver import resolve_service_config
from .unit_query import UnitQueryProvider
from .uptime import compute_uptime, get_boot_time

logger = logging.getLogger(__name__)


class StatusAggregator:
    """Collects ServiceInfo records for every configured service.

    A service whose queries fail is skipped and logged; one broken
    service never fails the whole aggregation.
    """

    def __init__(self, provider: UnitQueryProvider, max_workers: Optional[int] = None):
        """Initialize the aggregator.

        Args:
            provider: Source of unit state
            max_workers: Upper bound on concurrent queries (default: one per service)
        """
        self.provider = provider
        self.max_workers = max_workers

    def aggregate(self, configs: Sequence[ServiceConfig]) -> List[ServiceInfo]:
        """Get status records for all configured services.

        Args:
            configs: Configured services

        Returns:
            ServiceInfo records in configuration order, skipped services omitted
        """
        configs = list(configs)
        if not configs:
            return []

        boot_time = get_boot_time()
        results = self._collect_all(configs, boot_time)

        services = []
        reported = set()
        for index in sorted(results):
            result = results[index]
            if not result.ok:
                logger.warning(f"Skipping {result.service_name}: {result.reason}")
                continue

            key = result.info.config.service_name
            if key in reported:
                logger.warning(f"Skipping {result.service_name}: resolves to {key}, which is already reported")
                continue

            reported.add(key)
            services.append(result.info)

        logger.debug(f"Aggregated {len(services)} of {len(configs)} services")
        return services

    def _collect_all(self, configs: List[ServiceConfig], boot_time: datetime) -> Dict[int, ServiceResult]:
        """Run collect_service for every config on a bounded thread pool."""
        workers = len(configs)
        if self.max_workers is not None:
            workers = max(1, min(workers, self.max_workers))

        results: Dict[int, ServiceResult] = {}
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="unit-query")
        try:
            futures = {
                executor.submit(self.collect_service, config, configs, boot_time): index
                for index, config in enumerate(configs)
            }
            for future in concurrent.futures.as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    logger.exception(f"Unexpected error collecting {configs[index].service_name}")
                    results[index] = ServiceResult.skipped(configs[index].service_name, f"unexpected error: {e}")
        finally:
            # Abandons queued work if the caller is interrupted
            executor.shutdown(wait=False, cancel_futures=True)

        return results

    def collect_service(
        self,
        config: ServiceConfig,
        configs: Sequence[ServiceConfig],
        boot_time: Optional[datetime] = None
    ) -> ServiceResult:
        """Build the status record for one service.

        Args:
            config: Service to collect
            configs: All configured services, used to match the reported unit
            boot_time: Shared boot time (looked up if not given)

        Returns:
            ServiceResult holding either the record or the skip reason
        """
        service_name = config.service_name

        try:
            unit = self.provider.enumerate_unit(service_name)
        except QueryFailure as e:
            return ServiceResult.skipped(service_name, str(e))

        pid = self._optional_int(service_name, PROP_MAIN_PID)
        status_code = self._optional_int(service_name, PROP_STATUS_ERRNO)

        try:
            start_us = self._mandatory_int(service_name, PROP_START_TIMESTAMP)
        except MandatoryFieldFailure as e:
            return ServiceResult.skipped(service_name, str(e))

        if boot_time is None:
            boot_time = get_boot_time()
        uptime = compute_uptime(start_us, boot_time)

        logger.debug(f"Unit name: {unit.name}")

        try:
            unit_config = resolve_service_config(unit.name, configs)
        except ResolutionFailure as e:
            return ServiceResult.skipped(service_name, f"{e} (configured as {service_name})")

        return ServiceResult.success(ServiceInfo.from_unit(unit_config, unit, pid, status_code, uptime))

    def _optional_int(self, unit: str, property_name: str) -> Optional[int]:
        """Read an integer property, returning None if it is unavailable."""
        try:
            return int(self.provider.query_property(unit, property_name))
        except QueryFailure as e:
            logger.debug(f"{property_name} unavailable for {unit}: {e}")
        except ValueError as e:
            logger.debug(f"{property_name} for {unit} is not an integer: {e}")
        return None

    def _mandatory_int(self, unit: str, property_name: str) -> int:
        """Read an integer property that the record cannot do without."""
        try:
            value = self.provider.query_property(unit, property_name)
        except QueryFailure as e:
            raise MandatoryFieldFailure(unit, property_name, str(e)) from e

        try:
            parsed = int(value)
        except ValueError as e:
            raise MandatoryFieldFailure(unit, property_name, f"unparseable value '{value}'") from e

        if parsed < 0:
            raise MandatoryFieldFailure(unit, property_name, f"negative value {parsed}")

        return parsed


def aggregate(configs: Sequence[ServiceConfig], provider: UnitQueryProvider) -> List[ServiceInfo]:
    """Get status records for all configured services with a default aggregator."""
    return StatusAggregator(provider).aggregate(configs)
