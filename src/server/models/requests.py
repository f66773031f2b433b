"""Request models for API endpoints."""
from typing import Annotated, Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.delivery.models import DispatchRequest

ChannelName = Literal["email", "sms", "push", "in_app", "webhook"]
PriorityName = Literal["low", "normal", "high", "urgent"]


class SendMessageRequest(BaseModel):
    """Body of POST /v2/messages.

    Template, scheduling and webhook fields are accepted and stored with the
    message but do not change how it is delivered.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    recipients: Annotated[list[str], Field(min_length=1)]
    content: Annotated[str, Field(min_length=1)]
    channels: Annotated[list[ChannelName], Field(min_length=1)]
    priority: PriorityName = "normal"
    template_id: Optional[str] = None
    template_variables: Optional[dict[str, Any]] = None
    scheduled_at: Optional[str] = None
    category: Optional[str] = None
    webhook_url: Optional[str] = None
    demo_mode: bool = True

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content cannot be blank")
        return v

    def to_dispatch(self) -> DispatchRequest:
        return DispatchRequest(
            recipients=tuple(self.recipients),
            content=self.content,
            channels=tuple(self.channels),
            priority=self.priority,
            category=self.category,
            template_id=self.template_id,
            template_variables=self.template_variables,
            scheduled_at=self.scheduled_at,
            webhook_url=self.webhook_url,
            demo_mode=self.demo_mode,
        )
