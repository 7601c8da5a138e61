from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, UUID):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


@dataclass(frozen=True, slots=True)
class RoutedEvent:
    """A realtime event plus its routing. ``rooms=None`` means broadcast to everyone."""

    event: str
    data: dict[str, Any]
    rooms: list[str] | None = None
    exclude: str | None = None


def serialize_event(routed: RoutedEvent) -> str:
    envelope = {
        "event": routed.event,
        "rooms": routed.rooms,
        "exclude": routed.exclude,
        "data": routed.data,
    }
    return json.dumps(envelope, cls=_Encoder)


def deserialize_event(raw: str | bytes) -> RoutedEvent:
    data = json.loads(raw)
    return RoutedEvent(
        event=data["event"],
        data=data["data"],
        rooms=data.get("rooms"),
        exclude=data.get("exclude"),
    )
