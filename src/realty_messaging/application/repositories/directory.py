from __future__ import annotations

from typing import Iterable, Protocol
from uuid import UUID

from realty_messaging.domain.entities.directory import PropertyRef, UserProfile


class UserDirectory(Protocol):
    async def get_profile(self, user_id: UUID) -> UserProfile | None: ...

    async def get_profiles(self, user_ids: Iterable[UUID]) -> dict[UUID, UserProfile]: ...


class PropertyDirectory(Protocol):
    async def get(self, property_id: UUID) -> PropertyRef | None: ...
