"""WebSocket tests. A single TestClient portal keeps all sockets on one event loop."""
from __future__ import annotations

import uuid

import jwt
import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from realty_messaging.api.deps import get_uow, get_uow_factory
from realty_messaging.app import create_app
from realty_messaging.config import settings
from tests.conftest import (
    BUYER_ID,
    SELLER_ID,
    STRANGER_ID,
    FakeUoW,
    make_conversation,
    make_profile,
)


def _token(user_id: uuid.UUID) -> str:
    return jwt.encode({"user_id": str(user_id)}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def _receive_until(ws, event_type: str) -> tuple[dict, list[dict]]:
    """Read frames until ``event_type`` arrives. Returns it and the frames skipped on the way."""
    skipped = []
    while True:
        msg = ws.receive_json()
        if msg["type"] == event_type:
            return msg, skipped
        skipped.append(msg)


@pytest.fixture
def uow() -> FakeUoW:
    uow = FakeUoW()
    uow.add_user(make_profile(BUYER_ID, name="Bea"))
    uow.add_user(make_profile(SELLER_ID, name="Sam", user_type="seller"))
    uow.add_user(make_profile(STRANGER_ID, name="Eve"))
    return uow


@pytest.fixture
def client(uow):
    app = create_app()

    async def _override_uow():
        yield uow

    app.dependency_overrides[get_uow] = _override_uow
    app.dependency_overrides[get_uow_factory] = lambda: (lambda: uow)
    with TestClient(app) as client:
        yield client


def test_invalid_token_closes_with_4001(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/ws?token=not-a-jwt"):
            pass
    assert exc.value.code == 4001


def test_missing_token_closes_with_4001(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect("/ws"):
            pass
    assert exc.value.code == 4001


def test_unknown_user_closes_with_4001(client):
    with pytest.raises(WebSocketDisconnect) as exc:
        with client.websocket_connect(f"/ws?token={_token(uuid.uuid4())}"):
            pass
    assert exc.value.code == 4001


def test_ping_pong(client):
    with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as ws:
        ws.send_json({"type": "ping", "data": {}})
        assert ws.receive_json() == {"type": "pong", "data": {}}


def test_unknown_event_type_gets_error(client):
    with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as ws:
        ws.send_json({"type": "subscribe", "data": {}})
        msg, _ = _receive_until(ws, "error")
        assert "subscribe" in msg["data"]["message"]


def test_participant_joins_conversation_room(client, uow):
    conv = uow.add_conversation(make_conversation())

    with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as ws:
        ws.send_json({"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}})
        msg, _ = _receive_until(ws, "room_joined")
        assert msg["data"] == {"room_type": "conversation", "room_id": str(conv.id), "status": "joined"}


def test_non_participant_gets_room_error(client, uow):
    conv = uow.add_conversation(make_conversation())

    with client.websocket_connect(f"/ws?token={_token(STRANGER_ID)}") as ws:
        ws.send_json({"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}})
        msg = ws.receive_json()
        assert msg["type"] == "room_error"
        assert msg["data"]["message"] == "Not authorized to join this conversation"


def test_malformed_join_gets_room_error(client):
    with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as ws:
        ws.send_json({"type": "join_room", "data": {"room_type": "galaxy", "room_id": "x"}})
        assert ws.receive_json()["type"] == "room_error"


def test_store_failure_on_join_answers_room_error_and_keeps_socket(client, uow):
    conv = uow.add_conversation(make_conversation())

    async def _store_down(conversation_id):
        raise RuntimeError("store unavailable")

    with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as ws:
        uow.conversations.get_by_id = _store_down
        ws.send_json({"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}})
        msg = ws.receive_json()
        assert msg == {"type": "room_error", "data": {"message": "Failed to join room"}}

        ws.send_json({"type": "ping", "data": {}})
        assert ws.receive_json()["type"] == "pong"


def test_typing_reaches_peer_but_not_sender(client, uow):
    conv = uow.add_conversation(make_conversation())
    join = {"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}}

    with client.websocket_connect(f"/ws?token={_token(SELLER_ID)}") as seller_ws:
        seller_ws.send_json(join)
        _receive_until(seller_ws, "room_joined")

        with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as buyer_ws:
            buyer_ws.send_json(join)
            _receive_until(buyer_ws, "room_joined")

            buyer_ws.send_json({"type": "typing_start", "data": {"conversation_id": str(conv.id)}})
            buyer_ws.send_json({"type": "ping", "data": {}})
            _, skipped = _receive_until(buyer_ws, "pong")
            assert all(m["type"] != "typing_indicator" for m in skipped)

            typing, _ = _receive_until(seller_ws, "typing_indicator")
            assert typing["data"]["user_id"] == str(BUYER_ID)
            assert typing["data"]["user_name"] == "Bea"
            assert typing["data"]["is_typing"] is True


def test_typing_ignored_without_joining_room(client, uow):
    conv = uow.add_conversation(make_conversation())

    with client.websocket_connect(f"/ws?token={_token(SELLER_ID)}") as seller_ws:
        seller_ws.send_json({"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}})
        _receive_until(seller_ws, "room_joined")

        with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}") as buyer_ws:
            buyer_ws.send_json({"type": "typing_start", "data": {"conversation_id": str(conv.id)}})
            buyer_ws.send_json({"type": "ping", "data": {}})
            _receive_until(buyer_ws, "pong")

            seller_ws.send_json({"type": "ping", "data": {}})
            _, skipped = _receive_until(seller_ws, "pong")
            assert all(m["type"] != "typing_indicator" for m in skipped)


def test_presence_online_and_offline_reach_others(client):
    with client.websocket_connect(f"/ws?token={_token(SELLER_ID)}") as seller_ws:
        with client.websocket_connect(f"/ws?token={_token(BUYER_ID)}"):
            online, _ = _receive_until(seller_ws, "user_presence")
            assert online["data"]["user_id"] == str(BUYER_ID)
            assert online["data"]["status"] == "online"

        offline, _ = _receive_until(seller_ws, "user_presence")
        assert offline["data"]["status"] == "offline"


def test_rest_message_is_pushed_once_to_recipient(client, uow):
    conv = uow.add_conversation(make_conversation())

    with client.websocket_connect(f"/ws?token={_token(SELLER_ID)}") as seller_ws:
        # Subscribed via both user_<id> and conversation_<id>; still one copy
        seller_ws.send_json({"type": "join_room", "data": {"room_type": "conversation", "room_id": str(conv.id)}})
        _receive_until(seller_ws, "room_joined")

        resp = client.post(
            f"/api/v1/conversations/{conv.id}/messages",
            json={"message_content": "Is this available?"},
            headers={"Authorization": f"Bearer {_token(BUYER_ID)}"},
        )
        assert resp.status_code == 201

        pushed, _ = _receive_until(seller_ws, "new_message")
        assert pushed["data"]["id"] == resp.json()["id"]
        assert pushed["data"]["message_content"] == "Is this available?"

        seller_ws.send_json({"type": "ping", "data": {}})
        _, skipped = _receive_until(seller_ws, "pong")
        assert all(m["type"] != "new_message" for m in skipped)
