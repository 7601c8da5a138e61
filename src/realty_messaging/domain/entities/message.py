from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Message:
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    recipient_id: UUID
    content: str
    type: str
    attachment_url: str | None
    is_read: bool
    read_at: datetime | None
    is_system_message: bool
    created_at: datetime
