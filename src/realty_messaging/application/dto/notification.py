from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from realty_messaging.domain.entities.notification import Notification
from realty_messaging.domain.value_objects.enums import NotificationType


@dataclass(frozen=True, slots=True)
class NotificationFilterDTO:
    user_id: UUID
    is_read: bool | None = None
    type: NotificationType | None = None
    property_id: UUID | None = None
    limit: int = 20
    offset: int = 0


@dataclass(frozen=True, slots=True)
class NotificationPage:
    notifications: list[Notification]
    unread_count: int
