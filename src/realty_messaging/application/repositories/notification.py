from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from realty_messaging.application.dto.notification import NotificationFilterDTO
from realty_messaging.domain.entities.notification import Notification


class NotificationReader(Protocol):
    async def get_for_user(self, notification_id: UUID, user_id: UUID) -> Notification | None: ...

    async def list_for_user(self, filters: NotificationFilterDTO) -> list[Notification]: ...

    async def count_unread(self, user_id: UUID) -> int: ...


class NotificationWriter(Protocol):
    async def create(self, notification: Notification) -> Notification: ...

    async def mark_read(self, notification_id: UUID, user_id: UUID, ts: datetime) -> bool: ...

    async def mark_all_read(self, user_id: UUID, ts: datetime) -> int:
        """Return the number of notifications flipped from unread to read."""
        ...
