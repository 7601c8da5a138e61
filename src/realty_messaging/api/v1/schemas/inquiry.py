from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from realty_messaging.application.dto.inquiry import (
    CreateInquiryDTO,
    InquirySummary,
    UpdateInquiryDTO,
)
from realty_messaging.domain.value_objects.enums import (
    ContactPreference,
    InquiryStatus,
    InquiryType,
)


class CreateInquiryRequest(BaseModel):
    property_id: UUID
    inquiry_type: InquiryType
    message: str = Field(min_length=1, max_length=2000)
    contact_preference: ContactPreference
    phone_number: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    preferred_viewing_date: str | None = None
    preferred_viewing_time: str | None = None

    def to_dto(self) -> CreateInquiryDTO:
        return CreateInquiryDTO(**self.model_dump())


class UpdateInquiryRequest(BaseModel):
    status: InquiryStatus | None = None
    response_message: str | None = Field(None, min_length=1, max_length=2000)
    responded_at: datetime | None = None

    def to_dto(self) -> UpdateInquiryDTO:
        return UpdateInquiryDTO(**self.model_dump())


class InquiryResponse(BaseModel):
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

    model_config = {"from_attributes": True}


class InquirySummaryResponse(InquiryResponse):
    property_title: str | None
    inquirer_name: str | None
    inquirer_photo: str | None
    inquirer_type: str | None

    @classmethod
    def from_summary(cls, summary: InquirySummary) -> InquirySummaryResponse:
        base = InquiryResponse.model_validate(summary.inquiry, from_attributes=True)
        return cls(
            **base.model_dump(),
            property_title=summary.property_title,
            inquirer_name=summary.inquirer_name,
            inquirer_photo=summary.inquirer_photo,
            inquirer_type=summary.inquirer_type,
        )
