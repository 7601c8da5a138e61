"""Engine and session factory. One session per REST request or per inbound WS event."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from realty_messaging.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    pool_recycle=settings.DB_POOL_RECYCLE,
    # Tags our connections in pg_stat_activity; the users/properties tables are shared
    connect_args={"server_settings": {"application_name": "realty-messaging"}},
)

# expire_on_commit off: entities are mapped out of models after commit
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)
