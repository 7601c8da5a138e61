from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from realty_messaging.api.middleware.correlation_id import CorrelationIdMiddleware
from realty_messaging.api.middleware.metrics import RequestTimingMiddleware
from realty_messaging.api.v1.routers import (
    conversations,
    health,
    inquiries,
    messages,
    notifications,
    ws,
)
from realty_messaging.application.exceptions import AppError, InternalError
from realty_messaging.config import settings
from realty_messaging.infrastructure.bus.redis_pubsub import (
    RedisDispatcher,
    RedisPubSubSubscriber,
)
from realty_messaging.infrastructure.ws.dispatcher import LocalDispatcher
from realty_messaging.infrastructure.ws.manager import ConnectionManager
from realty_messaging.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle.

    With ``REALTIME_BACKEND=redis`` every emit is published to Redis and each
    instance's subscriber delivers it to its own connections.
    """
    if settings.REALTIME_BACKEND != "redis":
        yield
        return

    app.state.redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    logger.info("Redis connection pool created")

    local: LocalDispatcher = app.state.local_dispatcher
    subscriber = RedisPubSubSubscriber(
        app.state.redis,
        settings.REDIS_PUBSUB_CHANNEL,
        local.deliver,
    )
    await subscriber.start()
    app.state.pubsub_subscriber = subscriber
    app.state.dispatcher = RedisDispatcher(app.state.redis, settings.REDIS_PUBSUB_CHANNEL)

    try:
        yield
    finally:
        app.state.dispatcher = local
        await subscriber.stop()
        await app.state.redis.aclose()
        logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Realty Messaging Service",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.connections = ConnectionManager()
    app.state.local_dispatcher = LocalDispatcher(app.state.connections)
    app.state.dispatcher = app.state.local_dispatcher

    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Outermost, so the timing log line carries the request id
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(conversations.router)
    app.include_router(messages.router)
    app.include_router(notifications.router)
    app.include_router(inquiries.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def _app_error(req: Request, exc: AppError) -> JSONResponse:
        if isinstance(exc, InternalError):
            logger.error("Internal error on %s %s: %s", req.method, req.url.path, exc.detail)
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def _unhandled(req: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", req.method, req.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
