from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status

from realty_messaging.api.deps import CurrentPrincipal, DispatcherDep, UoWDep
from realty_messaging.api.v1.schemas.inquiry import (
    CreateInquiryRequest,
    InquiryResponse,
    InquirySummaryResponse,
    UpdateInquiryRequest,
)
from realty_messaging.application.dto.inquiry import InquiryFilterDTO
from realty_messaging.domain.value_objects.enums import InquiryStatus, InquiryType
from realty_messaging.services import inquiry_service

router = APIRouter(prefix="/api/v1/inquiries", tags=["inquiries"])


@router.get("", response_model=list[InquirySummaryResponse])
async def list_inquiries(
    principal: CurrentPrincipal,
    uow: UoWDep,
    property_id: UUID | None = Query(None),
    status_: InquiryStatus | None = Query(None, alias="status"),
    inquiry_type: InquiryType | None = Query(None),
) -> list[InquirySummaryResponse]:
    filters = InquiryFilterDTO(
        property_id=property_id,
        status=status_,
        inquiry_type=inquiry_type,
    )
    summaries = await inquiry_service.list_inquiries(principal, filters, uow)
    return [InquirySummaryResponse.from_summary(s) for s in summaries]


@router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
async def create_inquiry(
    body: CreateInquiryRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> InquiryResponse:
    inquiry = await inquiry_service.create_inquiry(principal, body.to_dto(), uow, dispatcher)
    return InquiryResponse.model_validate(inquiry, from_attributes=True)


@router.put("/{inquiry_id}", response_model=InquiryResponse)
async def update_inquiry(
    inquiry_id: UUID,
    body: UpdateInquiryRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> InquiryResponse:
    inquiry = await inquiry_service.update_inquiry(
        inquiry_id, principal, body.to_dto(), uow, dispatcher,
    )
    return InquiryResponse.model_validate(inquiry, from_attributes=True)
