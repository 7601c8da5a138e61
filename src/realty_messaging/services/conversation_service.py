from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import datetime, timezone

from realty_messaging.application.dto.conversation import (
    ConversationFilterDTO,
    ConversationSummary,
)
from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import NotFoundError, ValidationError
from realty_messaging.application.policies.permissions import assert_conversation_access
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.domain.entities.conversation import Conversation

logger = logging.getLogger(__name__)


async def get_or_create_conversation(
    property_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> tuple[Conversation, bool]:
    """Return the caller's conversation with the property owner, creating it if needed.

    The seller is always the property's current owner, never client input.
    Returns (conversation, created).
    """
    prop = await uow.properties.get(property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    if prop.owner_id == principal.user_id:
        raise ValidationError("Cannot start a conversation about your own property")

    existing = await uow.conversations.get_by_participants(
        prop.id, principal.user_id, prop.owner_id,
    )
    if existing is not None:
        return existing, False

    now = datetime.now(timezone.utc)
    conversation = Conversation(
        id=uuid.uuid4(),
        property_id=prop.id,
        buyer_id=principal.user_id,
        seller_id=prop.owner_id,
        last_message_at=None,
        is_archived=False,
        created_at=now,
        updated_at=now,
    )
    conversation, created = await uow.conversations_w.create_if_not_exists(conversation)
    if created:
        await uow.commit()
        logger.info(
            "Created conversation %s for property %s (buyer %s, seller %s)",
            conversation.id, prop.id, principal.user_id, prop.owner_id,
        )
    return conversation, created


async def list_conversations(
    principal: Principal,
    property_id: uuid.UUID | None,
    is_archived: bool,
    limit: int,
    offset: int,
    uow: UnitOfWork,
) -> list[ConversationSummary]:
    filters = ConversationFilterDTO(
        user_id=principal.user_id,
        property_id=property_id,
        is_archived=is_archived,
        limit=limit,
        offset=offset,
    )
    return await uow.conversations.list_for_user(filters)


async def get_conversation(
    conversation_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
) -> Conversation:
    conversation = await uow.conversations.get_by_id(conversation_id)
    return assert_conversation_access(principal, conversation)


async def set_archived(
    conversation_id: uuid.UUID,
    principal: Principal,
    is_archived: bool,
    uow: UnitOfWork,
) -> Conversation:
    """Archive or restore a conversation. The flag is shared by both participants."""
    conversation = assert_conversation_access(
        principal,
        await uow.conversations.get_by_id(conversation_id),
        action="update",
    )

    now = datetime.now(timezone.utc)
    await uow.conversations_w.set_archived(conversation_id, is_archived, now)
    await uow.commit()
    return replace(conversation, is_archived=is_archived, updated_at=now)
