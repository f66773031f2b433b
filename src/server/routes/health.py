"""GET /health endpoint handler."""
from datetime import datetime, timezone
from fastapi import APIRouter, status
from src.delivery.store import MessageStore
from src.server.config import ServerConfig
from src.server.models.responses import HealthResponse


def create_health_router(config: ServerConfig, store: MessageStore) -> APIRouter:
    """Create health router with injected dependencies."""
    router = APIRouter()

    @router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK, tags=["status"])
    async def health_check() -> HealthResponse:
        """Check if the service is operational."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"
        return HealthResponse(
            status="healthy", service=config.service_name, version=config.version,
            timestamp=timestamp, messages_stored=len(store),
        )

    return router
