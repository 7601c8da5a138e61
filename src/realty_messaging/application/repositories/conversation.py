from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from realty_messaging.application.dto.conversation import (
    ConversationFilterDTO,
    ConversationSummary,
)
from realty_messaging.domain.entities.conversation import Conversation


class ConversationReader(Protocol):
    async def get_by_id(self, conversation_id: UUID) -> Conversation | None: ...

    async def get_by_participants(
        self, property_id: UUID, buyer_id: UUID, seller_id: UUID,
    ) -> Conversation | None: ...

    async def list_for_user(
        self, filters: ConversationFilterDTO
    ) -> list[ConversationSummary]: ...


class ConversationWriter(Protocol):
    async def create_if_not_exists(self, conversation: Conversation) -> tuple[Conversation, bool]:
        """Insert unless the (property, buyer, seller) triple exists. Return (conversation, created)."""
        ...

    async def set_archived(self, conversation_id: UUID, is_archived: bool, ts: datetime) -> None: ...

    async def touch_last_message_at(
        self, conversation_id: UUID, ts: datetime
    ) -> None: ...
