"""Read-only views of records owned by the account and listing services."""
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, slots=True)
class UserProfile:
    id: UUID
    name: str
    profile_photo: str | None
    user_type: str | None


@dataclass(frozen=True, slots=True)
class PropertyRef:
    id: UUID
    owner_id: UUID
    title: str
