from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Conversation:
    id: UUID
    property_id: UUID
    buyer_id: UUID
    seller_id: UUID
    last_message_at: datetime | None
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    def is_participant(self, user_id: UUID) -> bool:
        return user_id in (self.buyer_id, self.seller_id)

    def other_participant(self, user_id: UUID) -> UUID:
        return self.seller_id if user_id == self.buyer_id else self.buyer_id
