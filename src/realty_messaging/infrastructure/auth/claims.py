from __future__ import annotations

from typing import Any
from uuid import UUID

from realty_messaging.application.dto.principal import Principal


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from decoded claims. ``user_id`` wins over ``sub``."""
    subject = payload.get("user_id", payload.get("sub"))
    if subject is None:
        raise ValueError("Token carries no user identity")
    return Principal(
        user_id=UUID(str(subject)),
        roles=list(payload.get("roles", [])),
    )
