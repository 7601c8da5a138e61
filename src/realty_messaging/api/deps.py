"""FastAPI dependency injection helpers."""
from __future__ import annotations

from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated, AsyncIterator, Callable

from fastapi import Depends, HTTPException, status
from fastapi.requests import HTTPConnection
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.ports.auth import TokenVerifier
from realty_messaging.application.ports.dispatcher import EventDispatcher
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.config import settings
from realty_messaging.infrastructure.auth.hs256_verifier import HS256Verifier
from realty_messaging.infrastructure.auth.jwks_verifier import JWKSVerifier
from realty_messaging.infrastructure.db.session import AsyncSessionLocal
from realty_messaging.infrastructure.db.uow import SqlAlchemyUoW

_bearer_scheme = HTTPBearer()


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]

UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]


@asynccontextmanager
async def _session_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow


def get_uow_factory() -> UoWFactory:
    """One short-lived unit of work per inbound WebSocket event."""
    return _session_uow


UoWFactoryDep = Annotated[UoWFactory, Depends(get_uow_factory)]


def get_dispatcher(conn: HTTPConnection) -> EventDispatcher:
    return conn.app.state.dispatcher


DispatcherDep = Annotated[EventDispatcher, Depends(get_dispatcher)]


def _get_verifier() -> TokenVerifier:
    if settings.JWT_VERIFY_MODE == "jwks":
        assert settings.JWKS_URL, "JWKS_URL must be set when JWT_VERIFY_MODE=jwks"
        return JWKSVerifier(settings.JWKS_URL)
    return HS256Verifier(settings.JWT_SECRET, settings.JWT_ALGORITHM)


_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    global _verifier  # noqa: PLW0603
    if _verifier is None:
        _verifier = _get_verifier()
    return _verifier


async def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(_bearer_scheme)],
) -> Principal:
    verifier = get_verifier()
    try:
        return await verifier.verify(credentials.credentials)
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        ) from exc


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
