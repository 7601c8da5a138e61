from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from realty_messaging.application.dto.conversation import ConversationSummary


class CreateConversationRequest(BaseModel):
    property_id: UUID


class UpdateConversationRequest(BaseModel):
    is_archived: bool


class ConversationResponse(BaseModel):
    id: UUID
    property_id: UUID
    buyer_id: UUID
    seller_id: UUID
    last_message_at: datetime | None
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ConversationSummaryResponse(ConversationResponse):
    property_title: str | None
    buyer_name: str | None
    buyer_photo: str | None
    seller_name: str | None
    seller_photo: str | None
    last_message_content: str | None
    unread_count: int

    @classmethod
    def from_summary(cls, summary: ConversationSummary) -> ConversationSummaryResponse:
        base = ConversationResponse.model_validate(summary.conversation, from_attributes=True)
        return cls(
            **base.model_dump(),
            property_title=summary.property_title,
            buyer_name=summary.buyer_name,
            buyer_photo=summary.buyer_photo,
            seller_name=summary.seller_name,
            seller_photo=summary.seller_photo,
            last_message_content=summary.last_message_content,
            unread_count=summary.unread_count,
        )
