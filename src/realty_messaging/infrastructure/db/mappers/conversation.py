from __future__ import annotations

from realty_messaging.domain.entities.conversation import Conversation
from realty_messaging.infrastructure.db.models.conversation import ConversationModel


def model_to_entity(model: ConversationModel) -> Conversation:
    return Conversation(
        id=model.id,
        property_id=model.property_id,
        buyer_id=model.buyer_id,
        seller_id=model.seller_id,
        last_message_at=model.last_message_at,
        is_archived=model.is_archived,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_values(entity: Conversation) -> dict:
    """Insert values keyed by mapped attribute; column names differ from attribute names."""
    return {
        ConversationModel.id: entity.id,
        ConversationModel.property_id: entity.property_id,
        ConversationModel.buyer_id: entity.buyer_id,
        ConversationModel.seller_id: entity.seller_id,
        ConversationModel.last_message_at: entity.last_message_at,
        ConversationModel.is_archived: entity.is_archived,
        ConversationModel.created_at: entity.created_at,
        ConversationModel.updated_at: entity.updated_at,
    }
