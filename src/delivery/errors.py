"""Exception types for the messaging hub."""
from typing import Optional, Any


class MessagingHubError(Exception):
    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidArgumentError(MessagingHubError, ValueError):
    """Malformed input reached the core."""
    status_code = 400
    error_code = "INVALID_ARGUMENT"


class MessageNotFoundError(MessagingHubError):
    status_code = 404
    error_code = "MESSAGE_NOT_FOUND"

    def __init__(self, message_id: str) -> None:
        super().__init__(f"Message not found: {message_id}", {"message_id": message_id})
        self.message_id = message_id


class DuplicateMessageError(MessagingHubError):
    status_code = 409
    error_code = "DUPLICATE_MESSAGE"

    def __init__(self, message_id: str) -> None:
        super().__init__(f"Message already stored: {message_id}", {"message_id": message_id})
        self.message_id = message_id
