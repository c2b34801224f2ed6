"""HTTP API exposing aggregated service status."""

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request

from .core.aggregator import StatusAggregator
from .core.config_manager import DashboardConfig
from .core.detail import fetch_detail
from .core.errors import QueryFailure
from .core.unit_query import UnitQueryProvider
from .utils.constants import APP_NAME, APP_VERSION

logger = logging.getLogger(__name__)

router = APIRouter(tags=["services"])


# Handlers are sync so FastAPI runs the blocking systemctl calls on its threadpool.

@router.get("/services")
def list_services(request: Request):
    """Live status of every configured service that could be resolved."""
    config: DashboardConfig = request.app.state.config
    aggregator: StatusAggregator = request.app.state.aggregator

    services = aggregator.aggregate(config.services)
    return [service.to_dict() for service in services]


@router.get("/service/{service}")
def get_service(service: str, request: Request):
    """Status text, logs and live fields for one configured service."""
    config: DashboardConfig = request.app.state.config

    service_config = config.get_service(service)
    if service_config is None:
        raise HTTPException(status_code=404, detail=f"Unknown service: {service}")

    try:
        detail = fetch_detail(
            service_config.service_name,
            service_config,
            request.app.state.provider,
            log_lines=config.settings.log_lines,
        )
    except QueryFailure as e:
        logger.error(f"Failed to fetch details for {service_config.service_name}: {e}")
        raise HTTPException(status_code=502, detail=str(e)) from e

    return detail.to_dict()


@router.get("/health")
def health(request: Request):
    """Liveness check."""
    return {"status": "ok", "services": len(request.app.state.config.services)}


def create_app(config: DashboardConfig, provider: UnitQueryProvider, aggregator: Optional[StatusAggregator] = None) -> FastAPI:
    """Create the API application.

    Args:
        config: Loaded configuration
        provider: Source of unit state
        aggregator: Aggregator to use (built from config settings if None)

    Returns:
        FastAPI application
    """
    app = FastAPI(title=APP_NAME, version=APP_VERSION)

    app.state.config = config
    app.state.provider = provider
    app.state.aggregator = aggregator or StatusAggregator(provider, max_workers=config.settings.max_workers)

    app.include_router(router)
    return app
