from __future__ import annotations

from typing import Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from realty_messaging.domain.entities.directory import PropertyRef, UserProfile
from realty_messaging.infrastructure.db.mappers import directory as mapper
from realty_messaging.infrastructure.db.models.directory import PropertyModel, UserModel


class UserDirectoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        result = await self._session.get(UserModel, user_id)
        return mapper.user_to_entity(result) if result else None

    async def get_profiles(self, user_ids: Iterable[UUID]) -> dict[UUID, UserProfile]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self._session.execute(select(UserModel).where(UserModel.id.in_(ids)))
        return {m.id: mapper.user_to_entity(m) for m in result.scalars().all()}


class PropertyDirectoryRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, property_id: UUID) -> PropertyRef | None:
        result = await self._session.get(PropertyModel, property_id)
        return mapper.property_to_entity(result) if result else None
