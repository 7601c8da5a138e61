"""Durable per-user notifications.

This store is the backstop for best-effort realtime delivery: a client that
was offline catches up by listing notifications, never by event replay.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any

from realty_messaging.application.dto.notification import (
    NotificationFilterDTO,
    NotificationPage,
)
from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import NotFoundError
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.domain.entities.notification import Notification
from realty_messaging.domain.value_objects.enums import NotificationType


async def create_notification(
    user_id: uuid.UUID,
    type: NotificationType,
    title: str,
    message: str,
    uow: UnitOfWork,
    *,
    property_id: uuid.UUID | None = None,
    data: dict[str, Any] | None = None,
) -> Notification:
    """Stage a notification in the caller's unit of work. The caller commits."""
    notification = Notification(
        id=uuid.uuid4(),
        user_id=user_id,
        type=type.value,
        title=title,
        message=message,
        data=data,
        property_id=property_id,
        is_read=False,
        read_at=None,
        created_at=datetime.now(timezone.utc),
    )
    return await uow.notifications_w.create(notification)


async def list_notifications(
    filters: NotificationFilterDTO,
    uow: UnitOfWork,
) -> NotificationPage:
    notifications = await uow.notifications.list_for_user(filters)
    unread_count = await uow.notifications.count_unread(filters.user_id)
    return NotificationPage(notifications=notifications, unread_count=unread_count)


async def mark_read(
    notification_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> Notification:
    notification = await uow.notifications.get_for_user(notification_id, principal.user_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.is_read:
        return notification

    now = datetime.now(timezone.utc)
    if await uow.notifications_w.mark_read(notification_id, principal.user_id, now):
        await uow.commit()
        return replace(notification, is_read=True, read_at=now)
    # Marked read concurrently; report the stored state
    return await uow.notifications.get_for_user(notification_id, principal.user_id)  # type: ignore[return-value]


async def mark_all_read(principal: Principal, uow: UnitOfWork) -> int:
    updated = await uow.notifications_w.mark_all_read(
        principal.user_id, datetime.now(timezone.utc),
    )
    await uow.commit()
    return updated
