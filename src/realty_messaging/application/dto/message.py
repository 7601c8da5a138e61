from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from realty_messaging.domain.entities.directory import UserProfile
from realty_messaging.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class MessageWithSender:
    message: Message
    sender: UserProfile | None

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe representation shared by REST responses and realtime events."""
        m = self.message
        return {
            "id": str(m.id),
            "conversation_id": str(m.conversation_id),
            "sender_id": str(m.sender_id),
            "recipient_id": str(m.recipient_id),
            "message_content": m.content,
            "message_type": m.type,
            "attachment_url": m.attachment_url,
            "is_read": m.is_read,
            "read_at": m.read_at.isoformat() if m.read_at else None,
            "is_system_message": m.is_system_message,
            "created_at": m.created_at.isoformat(),
            "sender_name": self.sender.name if self.sender else None,
            "sender_photo": self.sender.profile_photo if self.sender else None,
            "sender_type": self.sender.user_type if self.sender else None,
        }


@dataclass(frozen=True, slots=True)
class MessagePage:
    messages: list[MessageWithSender]
    total_count: int
