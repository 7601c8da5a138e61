from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from realty_messaging.application.dto.inquiry import InquiryFilterDTO, InquirySummary
from realty_messaging.domain.entities.inquiry import Inquiry
from realty_messaging.infrastructure.db.mappers import inquiry as mapper
from realty_messaging.infrastructure.db.models.directory import PropertyModel, UserModel
from realty_messaging.infrastructure.db.models.inquiry import InquiryModel


class InquiryReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, inquiry_id: UUID) -> Inquiry | None:
        result = await self._session.get(InquiryModel, inquiry_id)
        return mapper.model_to_entity(result) if result else None

    async def search(self, filters: InquiryFilterDTO) -> list[InquirySummary]:
        stmt = (
            select(
                InquiryModel,
                PropertyModel.title,
                UserModel.name,
                UserModel.profile_photo,
                UserModel.user_type,
            )
            .outerjoin(PropertyModel, PropertyModel.id == InquiryModel.property_id)
            .outerjoin(UserModel, UserModel.id == InquiryModel.user_id)
        )
        if filters.property_id is not None:
            stmt = stmt.where(InquiryModel.property_id == filters.property_id)
        if filters.user_id is not None:
            stmt = stmt.where(InquiryModel.user_id == filters.user_id)
        if filters.status is not None:
            stmt = stmt.where(InquiryModel.status == filters.status.value)
        if filters.inquiry_type is not None:
            stmt = stmt.where(InquiryModel.inquiry_type == filters.inquiry_type.value)
        stmt = stmt.order_by(InquiryModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [
            InquirySummary(
                inquiry=mapper.model_to_entity(model),
                property_title=title,
                inquirer_name=name,
                inquirer_photo=photo,
                inquirer_type=user_type,
            )
            for model, title, name, photo, user_type in result.all()
        ]


class InquiryWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, inquiry: Inquiry) -> Inquiry:
        model = mapper.entity_to_model(inquiry)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, inquiry_id: UUID, values: dict[str, Any], ts: datetime) -> Inquiry:
        stmt = (
            update(InquiryModel)
            .where(InquiryModel.id == inquiry_id)
            .values(**values, updated_at=ts)
            .returning(InquiryModel)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())
