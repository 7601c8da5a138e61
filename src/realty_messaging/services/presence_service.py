"""Room authorization, typing relay and presence announcements for live connections.

Presence is inferred by clients from the ``user_presence`` stream; no
authoritative online registry is kept.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from realty_messaging.application.exceptions import ForbiddenError
from realty_messaging.application.ports.dispatcher import EventDispatcher
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.domain.value_objects.enums import RoomType
from realty_messaging.domain.value_objects.rooms import conversation_room, property_room


async def authorize_room(
    user_id: uuid.UUID,
    room_type: RoomType,
    room_id: uuid.UUID,
    uow: UnitOfWork,
) -> str:
    """Return the room key ``user_id`` may join, or raise ForbiddenError.

    Conversation membership is checked against the store on every join.
    Property rooms carry only public broadcasts and are always granted.
    """
    if room_type == RoomType.CONVERSATION:
        conversation = await uow.conversations.get_by_id(room_id)
        if conversation is None or not conversation.is_participant(user_id):
            raise ForbiddenError("Not authorized to join this conversation")
        return conversation_room(room_id)
    return property_room(room_id)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


async def announce_presence(
    dispatcher: EventDispatcher,
    user_id: uuid.UUID,
    status: str,
    *,
    exclude: str | None = None,
) -> None:
    await dispatcher.broadcast(
        "user_presence",
        {"user_id": str(user_id), "status": status, "timestamp": _now()},
        exclude=exclude,
    )


async def relay_typing(
    dispatcher: EventDispatcher,
    conversation_id: uuid.UUID,
    user_id: uuid.UUID,
    user_name: str | None,
    is_typing: bool,
    *,
    exclude: str,
) -> None:
    data: dict[str, Any] = {
        "conversation_id": str(conversation_id),
        "user_id": str(user_id),
        "user_name": user_name,
        "is_typing": is_typing,
        "timestamp": _now(),
    }
    await dispatcher.emit([conversation_room(conversation_id)], "typing_indicator", data, exclude=exclude)
