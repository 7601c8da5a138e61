from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from realty_messaging.domain.entities.message import Message


class MessageReader(Protocol):
    async def get_by_id(self, message_id: UUID) -> Message | None: ...

    async def list_newest_first(
        self,
        conversation_id: UUID,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Message]: ...

    async def count(self, conversation_id: UUID) -> int: ...


class MessageWriter(Protocol):
    async def create(self, message: Message) -> Message: ...

    async def mark_read(self, message_id: UUID, recipient_id: UUID, ts: datetime) -> bool:
        """Flip an unread message addressed to recipient_id to read. Return True on transition."""
        ...
