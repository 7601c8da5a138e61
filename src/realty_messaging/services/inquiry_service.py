from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from realty_messaging.application.dto.inquiry import (
    CreateInquiryDTO,
    InquiryFilterDTO,
    InquirySummary,
    UpdateInquiryDTO,
)
from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from realty_messaging.application.policies.permissions import assert_property_owner
from realty_messaging.application.ports.dispatcher import EventDispatcher
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.domain.entities.inquiry import Inquiry
from realty_messaging.domain.value_objects.enums import InquiryStatus, NotificationType
from realty_messaging.domain.value_objects.rooms import user_room
from realty_messaging.services import notification_service


async def create_inquiry(
    principal: Principal,
    data: CreateInquiryDTO,
    uow: UnitOfWork,
    dispatcher: EventDispatcher,
) -> Inquiry:
    """Submit an inquiry and alert the property owner."""
    prop = await uow.properties.get(data.property_id)
    if prop is None:
        raise NotFoundError("Property not found")

    now = datetime.now(timezone.utc)
    inquiry = Inquiry(
        id=uuid.uuid4(),
        property_id=prop.id,
        user_id=principal.user_id,
        inquiry_type=data.inquiry_type.value,
        message=data.message,
        contact_preference=data.contact_preference.value,
        phone_number=data.phone_number,
        email=data.email,
        preferred_viewing_date=data.preferred_viewing_date,
        preferred_viewing_time=data.preferred_viewing_time,
        status=InquiryStatus.PENDING.value,
        response_message=None,
        responded_at=None,
        created_at=now,
        updated_at=now,
    )
    inquiry = await uow.inquiries_w.create(inquiry)

    await notification_service.create_notification(
        prop.owner_id,
        NotificationType.INQUIRY_RECEIVED,
        "New Property Inquiry",
        f"You have received a new {inquiry.inquiry_type} inquiry for your property",
        uow,
        property_id=prop.id,
        data={"inquiry_id": str(inquiry.id)},
    )
    await uow.commit()

    await dispatcher.emit(
        [user_room(prop.owner_id)],
        "new_inquiry",
        {
            "inquiry_id": str(inquiry.id),
            "property_id": str(prop.id),
            "property_title": prop.title,
            "inquiry_type": inquiry.inquiry_type,
            "message": inquiry.message,
            "created_at": inquiry.created_at.isoformat(),
        },
    )
    return inquiry


async def update_inquiry(
    inquiry_id: uuid.UUID,
    principal: Principal,
    data: UpdateInquiryDTO,
    uow: UnitOfWork,
    dispatcher: EventDispatcher,
) -> Inquiry:
    """Owner-side status change and/or response. A response alerts the inquirer."""
    inquiry = await uow.inquiries.get_by_id(inquiry_id)
    if inquiry is None:
        raise NotFoundError("Inquiry not found")
    prop = await uow.properties.get(inquiry.property_id)
    if prop is None or prop.owner_id != principal.user_id:
        raise ForbiddenError("Not authorized to update this inquiry")
    if data.is_empty():
        raise ValidationError("No fields to update")

    now = datetime.now(timezone.utc)
    values: dict[str, Any] = {}
    if data.status is not None:
        values["status"] = data.status.value
    if data.response_message is not None:
        values["response_message"] = data.response_message
        values["responded_at"] = data.responded_at or now
    elif data.responded_at is not None:
        values["responded_at"] = data.responded_at

    inquiry = await uow.inquiries_w.update(inquiry_id, values, now)

    if data.response_message is not None:
        await notification_service.create_notification(
            inquiry.user_id,
            NotificationType.INQUIRY_RESPONSE,
            "Inquiry Response Received",
            "You have received a response to your property inquiry",
            uow,
            property_id=inquiry.property_id,
            data={"inquiry_id": str(inquiry.id)},
        )
    await uow.commit()

    if data.response_message is not None:
        await dispatcher.emit(
            [user_room(inquiry.user_id)],
            "inquiry_response",
            {
                "inquiry_id": str(inquiry.id),
                "property_id": str(inquiry.property_id),
                "status": inquiry.status,
                "response_message": inquiry.response_message,
            },
        )
    return inquiry


async def list_inquiries(
    principal: Principal,
    filters: InquiryFilterDTO,
    uow: UnitOfWork,
) -> list[InquirySummary]:
    """Inquiries for an owned property, or the caller's own inquiries."""
    if filters.property_id is not None:
        assert_property_owner(
            principal,
            await uow.properties.get(filters.property_id),
            action="view inquiries for",
        )
        filters = InquiryFilterDTO(
            property_id=filters.property_id,
            status=filters.status,
            inquiry_type=filters.inquiry_type,
        )
    else:
        filters = InquiryFilterDTO(
            user_id=principal.user_id,
            status=filters.status,
            inquiry_type=filters.inquiry_type,
        )
    return await uow.inquiries.search(filters)
