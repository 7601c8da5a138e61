from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query

from realty_messaging.api.deps import CurrentPrincipal, UoWDep
from realty_messaging.api.v1.schemas.notification import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from realty_messaging.application.dto.notification import NotificationFilterDTO
from realty_messaging.config import settings
from realty_messaging.domain.value_objects.enums import NotificationType
from realty_messaging.services import notification_service

router = APIRouter(prefix="/api/v1/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    principal: CurrentPrincipal,
    uow: UoWDep,
    is_read: bool | None = Query(None),
    type: NotificationType | None = Query(None),
    property_id: UUID | None = Query(None),
    limit: int = Query(20, ge=1, le=settings.NOTIFICATIONS_PAGE_MAX),
    offset: int = Query(0, ge=0),
) -> NotificationListResponse:
    filters = NotificationFilterDTO(
        user_id=principal.user_id,
        is_read=is_read,
        type=type,
        property_id=property_id,
        limit=limit,
        offset=offset,
    )
    page = await notification_service.list_notifications(filters, uow)
    return NotificationListResponse(
        notifications=[
            NotificationResponse.model_validate(n, from_attributes=True)
            for n in page.notifications
        ],
        unread_count=page.unread_count,
    )


# Registered before /{notification_id}/read so the literal path wins
@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> MarkAllReadResponse:
    updated = await notification_service.mark_all_read(principal, uow)
    return MarkAllReadResponse(
        message="All notifications marked as read",
        updated_count=updated,
    )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_notification_read(
    notification_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> NotificationResponse:
    notification = await notification_service.mark_read(notification_id, principal, uow)
    return NotificationResponse.model_validate(notification, from_attributes=True)
