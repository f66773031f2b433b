"""Message dispatch, lookup and listing endpoints."""
import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Query, Request, Response, status

from src.delivery.errors import MessageNotFoundError
from src.delivery.service import MessagingService
from src.server.config import PaginationConfig
from src.server.middleware.logging import record_dispatch
from src.server.models.requests import SendMessageRequest
from src.server.models.responses import MessageResponse, MessageStatsResponse

logger = logging.getLogger(__name__)


def create_messages_router(
    service: MessagingService, pagination: PaginationConfig,
) -> APIRouter:
    """Create the messages router with injected dependencies."""
    router = APIRouter(prefix="/v2")

    @router.post(
        "/messages",
        response_model=MessageResponse,
        status_code=status.HTTP_201_CREATED,
        tags=["messages"],
    )
    async def send_message(
        body: SendMessageRequest, request: Request, response: Response,
    ) -> MessageResponse:
        """Send a message through each requested channel.

        Returns the stored message with per-channel outcomes and analytics.
        A failed channel is reported in the body, not as an error status.
        """
        record = service.send_message(body.to_dispatch())
        record_dispatch(request, record.message_id, record.status.value)
        response.headers["Location"] = f"/v2/messages/{record.message_id}"
        return MessageResponse.from_record(record)

    @router.get(
        "/messages",
        response_model=list[MessageResponse],
        status_code=status.HTTP_200_OK,
        tags=["messages"],
    )
    async def list_messages(
        status_filter: Annotated[
            Optional[str], Query(alias="status", description="Status filter"),
        ] = None,
        category: Annotated[Optional[str], Query(description="Category filter")] = None,
        page: Annotated[int, Query(ge=0, description="Zero-based page")] = 0,
        size: Annotated[
            int, Query(ge=1, le=pagination.max_page_size, description="Page size"),
        ] = pagination.default_page_size,
    ) -> list[MessageResponse]:
        """List stored messages, filtered by status and category."""
        records = service.list_messages(status_filter, category, page, size)
        return [MessageResponse.from_record(r) for r in records]

    @router.get(
        "/stats",
        response_model=MessageStatsResponse,
        status_code=status.HTTP_200_OK,
        tags=["messages"],
    )
    async def message_stats() -> MessageStatsResponse:
        """Count stored messages by status."""
        return MessageStatsResponse(**service.stats())

    @router.get(
        "/messages/{message_id}",
        response_model=MessageResponse,
        status_code=status.HTTP_200_OK,
        tags=["messages"],
    )
    async def get_message(message_id: str) -> MessageResponse:
        """Get one message with its per-channel delivery status."""
        record = service.get_message(message_id)
        if record is None:
            logger.debug("Message %s not found", message_id)
            raise MessageNotFoundError(message_id)
        return MessageResponse.from_record(record)

    return router
