from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as PydanticValidationError

from realty_messaging.api.deps import DispatcherDep, UoWFactory, UoWFactoryDep, get_verifier
from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import ForbiddenError
from realty_messaging.application.ports.dispatcher import EventDispatcher
from realty_messaging.config import settings
from realty_messaging.domain.entities.directory import UserProfile
from realty_messaging.domain.value_objects.enums import PresenceStatus
from realty_messaging.domain.value_objects.rooms import conversation_room, user_room
from realty_messaging.infrastructure.ws.manager import Connection, ConnectionManager
from realty_messaging.infrastructure.ws.protocol import (
    JoinRoomData,
    PresenceData,
    TypingData,
    WsInbound,
)
from realty_messaging.services import presence_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

WS_AUTH_FAILED = 4001


async def _authenticate(token: str | None, uow_factory: UoWFactory) -> tuple[Principal, UserProfile] | None:
    if not token:
        return None
    try:
        principal = await get_verifier().verify(token)
    except Exception:
        logger.debug("WS auth failed", exc_info=True)
        return None
    async with uow_factory() as uow:
        profile = await uow.users.get_profile(principal.user_id)
    if profile is None:
        logger.debug("WS auth failed: unknown user %s", principal.user_id)
        return None
    return principal, profile


@router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    uow_factory: UoWFactoryDep,
    dispatcher: DispatcherDep,
    token: str | None = Query(None),
) -> None:
    auth = await _authenticate(token, uow_factory)
    if auth is None:
        await websocket.close(code=WS_AUTH_FAILED, reason="Authentication failed")
        return
    principal, profile = auth

    manager: ConnectionManager = websocket.app.state.connections
    conn = await manager.connect(websocket, principal.user_id, profile.name)
    manager.join(conn, user_room(principal.user_id))
    await presence_service.announce_presence(
        dispatcher, principal.user_id, PresenceStatus.ONLINE.value, exclude=conn.id,
    )

    heartbeat_task = asyncio.create_task(
        _heartbeat(conn), name=f"ws-heartbeat-{conn.id}",
    )
    try:
        await _read_loop(conn, manager, dispatcher, uow_factory)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("WS error for user=%s conn=%s", conn.user_id, conn.id)
    finally:
        heartbeat_task.cancel()
        manager.disconnect(conn)
        await presence_service.announce_presence(
            dispatcher, principal.user_id, PresenceStatus.OFFLINE.value, exclude=conn.id,
        )


async def _heartbeat(conn: Connection) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await conn.send("pong", {})
    except asyncio.CancelledError:
        pass
    except Exception:
        logger.debug("Heartbeat stopped for conn=%s", conn.id, exc_info=True)


async def _read_loop(
    conn: Connection,
    manager: ConnectionManager,
    dispatcher: EventDispatcher,
    uow_factory: UoWFactory,
) -> None:
    while True:
        raw = await conn.ws.receive_text()
        try:
            msg = WsInbound.model_validate_json(raw)
        except PydanticValidationError:
            await conn.send("error", {"message": "Invalid payload"})
            continue

        if msg.type == "ping":
            await conn.send("pong", {})

        elif msg.type == "join_room":
            await _handle_join(conn, manager, msg.data, uow_factory)

        elif msg.type in ("typing_start", "typing_stop"):
            await _handle_typing(conn, dispatcher, msg.data, msg.type == "typing_start")

        elif msg.type == "update_presence":
            try:
                data = PresenceData.model_validate(msg.data)
            except PydanticValidationError:
                await conn.send("error", {"message": "Invalid presence status"})
                continue
            await presence_service.announce_presence(
                dispatcher, conn.user_id, data.status, exclude=conn.id,
            )

        else:
            await conn.send("error", {"message": f"Unknown event type: {msg.type}"})


async def _handle_join(
    conn: Connection,
    manager: ConnectionManager,
    raw: dict,
    uow_factory: UoWFactory,
) -> None:
    try:
        data = JoinRoomData.model_validate(raw)
    except PydanticValidationError:
        await conn.send("room_error", {"message": "Invalid room request"})
        return

    try:
        async with uow_factory() as uow:
            room = await presence_service.authorize_room(
                conn.user_id, data.room_type, data.room_id, uow,
            )
    except ForbiddenError as exc:
        await conn.send("room_error", {"message": exc.detail})
        return
    except Exception:
        # The socket stays open; a failed join is answered, never fatal
        logger.exception("join_room failed for user=%s conn=%s", conn.user_id, conn.id)
        await conn.send("room_error", {"message": "Failed to join room"})
        return

    manager.join(conn, room)
    await conn.send(
        "room_joined",
        {"room_type": data.room_type.value, "room_id": str(data.room_id), "status": "joined"},
    )


async def _handle_typing(
    conn: Connection,
    dispatcher: EventDispatcher,
    raw: dict,
    is_typing: bool,
) -> None:
    try:
        data = TypingData.model_validate(raw)
    except PydanticValidationError:
        await conn.send("error", {"message": "Invalid typing event"})
        return
    if conversation_room(data.conversation_id) not in conn.rooms:
        return
    await presence_service.relay_typing(
        dispatcher,
        data.conversation_id,
        conn.user_id,
        conn.user_name,
        is_typing,
        exclude=conn.id,
    )
