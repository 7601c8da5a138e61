from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from realty_messaging.api.deps import CurrentPrincipal, UoWDep
from realty_messaging.api.v1.schemas.conversation import (
    ConversationResponse,
    ConversationSummaryResponse,
    CreateConversationRequest,
    UpdateConversationRequest,
)
from realty_messaging.services import conversation_service

router = APIRouter(prefix="/api/v1/conversations", tags=["conversations"])


@router.get("", response_model=list[ConversationSummaryResponse])
async def list_conversations(
    principal: CurrentPrincipal,
    uow: UoWDep,
    property_id: UUID | None = Query(None),
    is_archived: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> list[ConversationSummaryResponse]:
    summaries = await conversation_service.list_conversations(
        principal, property_id, is_archived, limit, offset, uow,
    )
    return [ConversationSummaryResponse.from_summary(s) for s in summaries]


@router.post("", response_model=ConversationResponse)
async def get_or_create_conversation(
    body: CreateConversationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    response: Response,
) -> ConversationResponse:
    conv, created = await conversation_service.get_or_create_conversation(
        body.property_id, principal, uow,
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ConversationResponse.model_validate(conv, from_attributes=True)


@router.get("/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    conversation_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ConversationResponse:
    conv = await conversation_service.get_conversation(conversation_id, principal, uow)
    return ConversationResponse.model_validate(conv, from_attributes=True)


@router.patch("/{conversation_id}", response_model=ConversationResponse)
async def update_conversation(
    conversation_id: UUID,
    body: UpdateConversationRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> ConversationResponse:
    conv = await conversation_service.set_archived(
        conversation_id, principal, body.is_archived, uow,
    )
    return ConversationResponse.model_validate(conv, from_attributes=True)
