from __future__ import annotations

import logging
from typing import Any, Sequence

from realty_messaging.infrastructure.bus.serializer import RoutedEvent
from realty_messaging.infrastructure.ws.manager import ConnectionManager

logger = logging.getLogger(__name__)


class LocalDispatcher:
    """Implements application.ports.dispatcher.EventDispatcher for a single process."""

    def __init__(self, manager: ConnectionManager) -> None:
        self._manager = manager

    async def emit(
        self,
        rooms: Sequence[str],
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        delivered = await self._manager.send_to_rooms(rooms, event, data, exclude=exclude)
        if not delivered:
            logger.debug("No subscribers for %s in %s", event, list(rooms))

    async def broadcast(
        self,
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        await self._manager.send_to_all(event, data, exclude=exclude)

    async def deliver(self, routed: RoutedEvent) -> None:
        """Deliver an event received from the cross-instance bus to local connections."""
        if routed.rooms is None:
            await self.broadcast(routed.event, routed.data, exclude=routed.exclude)
        else:
            await self.emit(routed.rooms, routed.event, routed.data, exclude=routed.exclude)
