from __future__ import annotations

from realty_messaging.domain.entities.directory import PropertyRef, UserProfile
from realty_messaging.infrastructure.db.models.directory import PropertyModel, UserModel


def user_to_entity(model: UserModel) -> UserProfile:
    return UserProfile(
        id=model.id,
        name=model.name,
        profile_photo=model.profile_photo,
        user_type=model.user_type,
    )


def property_to_entity(model: PropertyModel) -> PropertyRef:
    return PropertyRef(id=model.id, owner_id=model.owner_id, title=model.title)
