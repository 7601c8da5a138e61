from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from realty_messaging.domain.entities.inquiry import Inquiry
from realty_messaging.domain.value_objects.enums import (
    ContactPreference,
    InquiryStatus,
    InquiryType,
)


@dataclass(frozen=True, slots=True)
class CreateInquiryDTO:
    property_id: UUID
    inquiry_type: InquiryType
    message: str
    contact_preference: ContactPreference
    phone_number: str | None = None
    email: str | None = None
    preferred_viewing_date: str | None = None
    preferred_viewing_time: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateInquiryDTO:
    status: InquiryStatus | None = None
    response_message: str | None = None
    responded_at: datetime | None = None

    def is_empty(self) -> bool:
        return self.status is None and self.response_message is None and self.responded_at is None


@dataclass(frozen=True, slots=True)
class InquiryFilterDTO:
    property_id: UUID | None = None
    user_id: UUID | None = None
    status: InquiryStatus | None = None
    inquiry_type: InquiryType | None = None


@dataclass(frozen=True, slots=True)
class InquirySummary:
    """An inquiry with the property title and the inquirer's profile, for listings."""

    inquiry: Inquiry
    property_title: str | None
    inquirer_name: str | None
    inquirer_photo: str | None
    inquirer_type: str | None
