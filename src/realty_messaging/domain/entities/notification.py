from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Notification:
    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    data: dict[str, Any] | None
    property_id: UUID | None
    is_read: bool
    read_at: datetime | None
    created_at: datetime
