from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Query, status

from realty_messaging.api.deps import CurrentPrincipal, DispatcherDep, UoWDep
from realty_messaging.api.v1.schemas.message import (
    MessageListResponse,
    MessageResponse,
    SendMessageRequest,
)
from realty_messaging.config import settings
from realty_messaging.services import message_service

router = APIRouter(prefix="/api/v1", tags=["messages"])


@router.get(
    "/conversations/{conversation_id}/messages",
    response_model=MessageListResponse,
)
async def list_messages(
    conversation_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    limit: int = Query(50, ge=1, le=settings.MESSAGES_PAGE_MAX),
    offset: int = Query(0, ge=0),
) -> MessageListResponse:
    page = await message_service.list_messages(
        conversation_id, principal, limit, offset, uow,
    )
    return MessageListResponse(
        messages=[MessageResponse.from_view(m) for m in page.messages],
        total_count=page.total_count,
    )


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    conversation_id: UUID,
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> MessageResponse:
    view = await message_service.send_message(
        conversation_id,
        principal,
        body.message_content,
        body.message_type,
        body.attachment_url,
        uow,
        dispatcher,
    )
    return MessageResponse.from_view(view)


@router.patch("/messages/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: UUID,
    principal: CurrentPrincipal,
    uow: UoWDep,
    dispatcher: DispatcherDep,
) -> MessageResponse:
    view = await message_service.mark_read(message_id, principal, uow, dispatcher)
    return MessageResponse.from_view(view)
