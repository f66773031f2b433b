"""Route handlers for the messaging hub API."""
from src.server.routes.messages import create_messages_router
from src.server.routes.health import create_health_router
__all__ = [
    "create_messages_router",
    "create_health_router",
]
