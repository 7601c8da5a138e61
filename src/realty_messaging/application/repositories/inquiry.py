from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from realty_messaging.application.dto.inquiry import InquiryFilterDTO, InquirySummary
from realty_messaging.domain.entities.inquiry import Inquiry


class InquiryReader(Protocol):
    async def get_by_id(self, inquiry_id: UUID) -> Inquiry | None: ...

    async def search(self, filters: InquiryFilterDTO) -> list[InquirySummary]: ...


class InquiryWriter(Protocol):
    async def create(self, inquiry: Inquiry) -> Inquiry: ...

    async def update(self, inquiry_id: UUID, values: dict[str, Any], ts: datetime) -> Inquiry: ...
