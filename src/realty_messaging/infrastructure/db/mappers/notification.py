from __future__ import annotations

from realty_messaging.domain.entities.notification import Notification
from realty_messaging.infrastructure.db.models.notification import NotificationModel


def model_to_entity(model: NotificationModel) -> Notification:
    return Notification(
        id=model.id,
        user_id=model.user_id,
        type=model.type,
        title=model.title,
        message=model.message,
        data=model.data,
        property_id=model.property_id,
        is_read=model.is_read,
        read_at=model.read_at,
        created_at=model.created_at,
    )


def entity_to_model(entity: Notification) -> NotificationModel:
    return NotificationModel(
        id=entity.id,
        user_id=entity.user_id,
        type=entity.type,
        title=entity.title,
        message=entity.message,
        data=entity.data,
        property_id=entity.property_id,
        is_read=entity.is_read,
        read_at=entity.read_at,
        created_at=entity.created_at,
    )
