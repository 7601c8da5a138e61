"""WebSocket message envelope models."""
from __future__ import annotations

from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from realty_messaging.domain.value_objects.enums import RoomType


class WsInbound(BaseModel):
    """Client → Server."""

    type: str  # join_room | typing_start | typing_stop | update_presence | ping
    data: dict[str, Any] = {}


class WsOutbound(BaseModel):
    """Server → Client."""

    type: str  # new_message | message_read | typing_indicator | user_presence | room_joined | ...
    data: dict[str, Any] = {}


class JoinRoomData(BaseModel):
    room_type: RoomType
    room_id: UUID


class TypingData(BaseModel):
    conversation_id: UUID


class PresenceData(BaseModel):
    status: str = Field(min_length=1, max_length=32)
