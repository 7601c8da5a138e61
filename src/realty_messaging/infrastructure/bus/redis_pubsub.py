"""Redis Pub/Sub fan-out: publish side + per-instance subscriber task."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Coroutine, Sequence

import redis.asyncio as aioredis

from realty_messaging.infrastructure.bus.serializer import (
    RoutedEvent,
    deserialize_event,
    serialize_event,
)

logger = logging.getLogger(__name__)


class RedisDispatcher:
    """Implements application.ports.dispatcher.EventDispatcher across instances.

    Every instance's RedisPubSubSubscriber delivers to its own connections,
    including the publishing instance.
    """

    def __init__(self, redis: aioredis.Redis, channel: str) -> None:
        self._redis = redis
        self._channel = channel

    async def emit(
        self,
        rooms: Sequence[str],
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        await self._publish(RoutedEvent(event=event, data=data, rooms=list(rooms), exclude=exclude))

    async def broadcast(
        self,
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        await self._publish(RoutedEvent(event=event, data=data, exclude=exclude))

    async def _publish(self, routed: RoutedEvent) -> None:
        try:
            await self._redis.publish(self._channel, serialize_event(routed))
        except Exception:
            logger.warning("Failed to publish %s, event dropped", routed.event, exc_info=True)


OnEventCallback = Callable[[RoutedEvent], Coroutine[Any, Any, None]]


class RedisPubSubSubscriber:
    """Background task that listens to a Redis channel and dispatches events."""

    def __init__(
        self,
        redis: aioredis.Redis,
        channel: str,
        callback: OnEventCallback,
    ) -> None:
        self._redis = redis
        self._channel = channel
        self._callback = callback
        self._task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        self._task = asyncio.create_task(self._listen(), name="redis-pubsub-subscriber")
        logger.info("Redis Pub/Sub subscriber started on channel=%s", self._channel)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            logger.info("Redis Pub/Sub subscriber stopped")

    async def _listen(self) -> None:
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(self._channel)
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    await self._callback(deserialize_event(message["data"]))
                except Exception:
                    logger.exception("Error processing pubsub message")
        finally:
            await pubsub.unsubscribe(self._channel)
            await pubsub.aclose()
