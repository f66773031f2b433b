"""FastAPI application factory."""
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from src.delivery.errors import MessagingHubError
from src.delivery.service import MessagingService
from src.delivery.simulator import ChannelDeliverySimulator
from src.delivery.store import MessageStore
from src.server.config import ServerConfig, load_config_from_env
from src.server.middleware.logging import RequestLoggingMiddleware
from src.server.models.responses import ErrorResponse, ErrorDetail
from src.server.routes.messages import create_messages_router
from src.server.routes.health import create_health_router

logger = logging.getLogger(__name__)


def build_service(config: ServerConfig, store: Optional[MessageStore] = None) -> MessagingService:
    """Build the messaging service from the simulation configuration."""
    simulator = ChannelDeliverySimulator(
        rng=config.simulation.make_rng(),
        success_rates=config.simulation.success_rates,
        default_rate=config.simulation.default_rate,
    )
    return MessagingService(store=store if store is not None else MessageStore(), simulator=simulator)


def create_app(
    config: Optional[ServerConfig] = None,
    service: Optional[MessagingService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    When called without arguments (e.g. via uvicorn --factory), loads
    configuration from environment variables. The store lives as long as
    the returned app.
    """
    if config is None:
        config = load_config_from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if service is None:
        service = build_service(config)
    if config.simulation.seed is not None:
        logger.info("Delivery simulation seeded with %d", config.simulation.seed)

    app = FastAPI(
        title=config.service_name,
        description="Multi-channel message dispatch with delivery tracking",
        version=config.version,
    )
    app.state.messaging_service = service
    if config.request_logging:
        app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(MessagingHubError, _hub_error_handler)
    app.include_router(create_messages_router(service, config.pagination))
    app.include_router(create_health_router(config, service.store))
    return app


async def _hub_error_handler(request: Request, exc: MessagingHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc.message)
    response = ErrorResponse(error=ErrorDetail(code=exc.error_code, message=exc.message, details=exc.details))
    return JSONResponse(status_code=exc.status_code, content=response.model_dump())
