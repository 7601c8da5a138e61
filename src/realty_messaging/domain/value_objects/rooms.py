"""Room key builders. Room keys are the only addressing scheme of the dispatcher."""
from __future__ import annotations

from uuid import UUID


def user_room(user_id: UUID) -> str:
    return f"user_{user_id}"


def conversation_room(conversation_id: UUID) -> str:
    return f"conversation_{conversation_id}"


def property_room(property_id: UUID) -> str:
    return f"property_{property_id}"
