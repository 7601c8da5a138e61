from __future__ import annotations

from realty_messaging.domain.entities.message import Message
from realty_messaging.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        conversation_id=model.conversation_id,
        sender_id=model.sender_id,
        recipient_id=model.recipient_id,
        content=model.content,
        type=model.type,
        attachment_url=model.attachment_url,
        is_read=model.is_read,
        read_at=model.read_at,
        is_system_message=model.is_system_message,
        created_at=model.created_at,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        conversation_id=entity.conversation_id,
        sender_id=entity.sender_id,
        recipient_id=entity.recipient_id,
        content=entity.content,
        type=entity.type,
        attachment_url=entity.attachment_url,
        is_read=entity.is_read,
        read_at=entity.read_at,
        is_system_message=entity.is_system_message,
        created_at=entity.created_at,
    )
