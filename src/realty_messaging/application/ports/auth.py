from __future__ import annotations

from typing import Protocol

from realty_messaging.application.dto.principal import Principal


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> Principal:
        """Decode and validate a bearer token. Raise on any failure."""
        ...
