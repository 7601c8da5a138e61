from __future__ import annotations

from typing import Any, Protocol, Sequence


class EventDispatcher(Protocol):
    """Best-effort push of realtime events to rooms.

    Implementations never raise on delivery problems: an event with no
    subscriber at dispatch time is dropped.
    """

    async def emit(
        self,
        rooms: Sequence[str],
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        """Deliver once to every connection joined to any of ``rooms``."""
        ...

    async def broadcast(
        self,
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None: ...
