from __future__ import annotations

from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import ForbiddenError, NotFoundError
from realty_messaging.domain.entities.conversation import Conversation
from realty_messaging.domain.entities.directory import PropertyRef


def assert_conversation_access(
    principal: Principal,
    conversation: Conversation | None,
    *,
    action: str = "access",
) -> Conversation:
    """Raise if conversation doesn't exist or principal is neither buyer nor seller."""
    if conversation is None:
        raise NotFoundError("Conversation not found")
    if not conversation.is_participant(principal.user_id):
        raise ForbiddenError(f"Not authorized to {action} this conversation")
    return conversation


def assert_property_owner(
    principal: Principal,
    prop: PropertyRef | None,
    *,
    action: str = "manage",
) -> PropertyRef:
    if prop is None:
        raise NotFoundError("Property not found")
    if prop.owner_id != principal.user_id:
        raise ForbiddenError(f"Not authorized to {action} this property")
    return prop
