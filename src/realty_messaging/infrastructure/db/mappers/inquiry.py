from __future__ import annotations

from realty_messaging.domain.entities.inquiry import Inquiry
from realty_messaging.infrastructure.db.models.inquiry import InquiryModel


def model_to_entity(model: InquiryModel) -> Inquiry:
    return Inquiry(
        id=model.id,
        property_id=model.property_id,
        user_id=model.user_id,
        inquiry_type=model.inquiry_type,
        message=model.message,
        contact_preference=model.contact_preference,
        phone_number=model.phone_number,
        email=model.email,
        preferred_viewing_date=model.preferred_viewing_date,
        preferred_viewing_time=model.preferred_viewing_time,
        status=model.status,
        response_message=model.response_message,
        responded_at=model.responded_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def entity_to_model(entity: Inquiry) -> InquiryModel:
    return InquiryModel(
        id=entity.id,
        property_id=entity.property_id,
        user_id=entity.user_id,
        inquiry_type=entity.inquiry_type,
        message=entity.message,
        contact_preference=entity.contact_preference,
        phone_number=entity.phone_number,
        email=entity.email,
        preferred_viewing_date=entity.preferred_viewing_date,
        preferred_viewing_time=entity.preferred_viewing_time,
        status=entity.status,
        response_message=entity.response_message,
        responded_at=entity.responded_at,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
