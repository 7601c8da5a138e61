from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from realty_messaging.domain.entities.conversation import Conversation


@dataclass(frozen=True, slots=True)
class ConversationFilterDTO:
    user_id: UUID
    property_id: UUID | None = None
    is_archived: bool = False
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True, slots=True)
class ConversationSummary:
    """A conversation as shown in a participant's inbox."""

    conversation: Conversation
    property_title: str | None
    buyer_name: str | None
    buyer_photo: str | None
    seller_name: str | None
    seller_photo: str | None
    last_message_content: str | None
    unread_count: int
