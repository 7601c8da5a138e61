from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from realty_messaging.application.dto.message import MessageWithSender
from realty_messaging.domain.value_objects.enums import MessageType


class SendMessageRequest(BaseModel):
    message_content: str = Field(min_length=1, max_length=5000)
    message_type: MessageType = MessageType.TEXT
    attachment_url: str | None = Field(None, max_length=500, pattern=r"^https?://\S+$")


class MessageResponse(BaseModel):
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    recipient_id: UUID
    message_content: str
    message_type: str
    attachment_url: str | None
    is_read: bool
    read_at: datetime | None
    is_system_message: bool
    created_at: datetime
    sender_name: str | None
    sender_photo: str | None
    sender_type: str | None

    @classmethod
    def from_view(cls, view: MessageWithSender) -> MessageResponse:
        return cls.model_validate(view.to_payload())


class MessageListResponse(BaseModel):
    messages: list[MessageResponse]
    total_count: int
