from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True, slots=True)
class Inquiry:
    id: UUID
    property_id: UUID
    user_id: UUID
    inquiry_type: str
    message: str
    contact_preference: str
    phone_number: str | None
    email: str | None
    preferred_viewing_date: str | None
    preferred_viewing_time: str | None
    status: str
    response_message: str | None
    responded_at: datetime | None
    created_at: datetime
    updated_at: datetime
