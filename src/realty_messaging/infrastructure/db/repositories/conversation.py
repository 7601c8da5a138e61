from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from realty_messaging.application.dto.conversation import (
    ConversationFilterDTO,
    ConversationSummary,
)
from realty_messaging.domain.entities.conversation import Conversation
from realty_messaging.infrastructure.db.mappers import conversation as mapper
from realty_messaging.infrastructure.db.models.conversation import ConversationModel
from realty_messaging.infrastructure.db.models.directory import PropertyModel, UserModel
from realty_messaging.infrastructure.db.models.message import MessageModel


class ConversationReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, conversation_id: UUID) -> Conversation | None:
        result = await self._session.get(ConversationModel, conversation_id)
        return mapper.model_to_entity(result) if result else None

    async def get_by_participants(
        self,
        property_id: UUID,
        buyer_id: UUID,
        seller_id: UUID,
    ) -> Conversation | None:
        stmt = select(ConversationModel).where(
            ConversationModel.property_id == property_id,
            ConversationModel.buyer_id == buyer_id,
            ConversationModel.seller_id == seller_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_for_user(
        self,
        filters: ConversationFilterDTO,
    ) -> list[ConversationSummary]:
        buyer = aliased(UserModel)
        seller = aliased(UserModel)

        unread_count = (
            select(func.count(MessageModel.id))
            .where(
                MessageModel.conversation_id == ConversationModel.id,
                MessageModel.recipient_id == filters.user_id,
                MessageModel.is_read.is_(False),
            )
            .correlate(ConversationModel)
            .scalar_subquery()
        )
        last_content = (
            select(MessageModel.content)
            .where(MessageModel.conversation_id == ConversationModel.id)
            .order_by(MessageModel.created_at.desc())
            .limit(1)
            .correlate(ConversationModel)
            .scalar_subquery()
        )

        stmt = (
            select(
                ConversationModel,
                PropertyModel.title,
                buyer.name,
                buyer.profile_photo,
                seller.name,
                seller.profile_photo,
                last_content,
                unread_count,
            )
            .outerjoin(PropertyModel, PropertyModel.id == ConversationModel.property_id)
            .outerjoin(buyer, buyer.id == ConversationModel.buyer_id)
            .outerjoin(seller, seller.id == ConversationModel.seller_id)
            .where(
                or_(
                    ConversationModel.buyer_id == filters.user_id,
                    ConversationModel.seller_id == filters.user_id,
                ),
                ConversationModel.is_archived.is_(filters.is_archived),
            )
        )
        if filters.property_id is not None:
            stmt = stmt.where(ConversationModel.property_id == filters.property_id)
        stmt = (
            stmt.order_by(
                ConversationModel.last_message_at.desc().nullslast(),
                ConversationModel.created_at.desc(),
            )
            .limit(filters.limit)
            .offset(filters.offset)
        )

        result = await self._session.execute(stmt)
        return [
            ConversationSummary(
                conversation=mapper.model_to_entity(model),
                property_title=title,
                buyer_name=buyer_name,
                buyer_photo=buyer_photo,
                seller_name=seller_name,
                seller_photo=seller_photo,
                last_message_content=content,
                unread_count=unread or 0,
            )
            for model, title, buyer_name, buyer_photo, seller_name, seller_photo, content, unread in result.all()
        ]


class ConversationWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_if_not_exists(self, conversation: Conversation) -> tuple[Conversation, bool]:
        """Insert guarded by uq_conversation_participants. Returns (conversation, created_flag)."""
        stmt = (
            pg_insert(ConversationModel)
            .values(mapper.entity_to_values(conversation))
            .on_conflict_do_nothing(constraint="uq_conversation_participants")
            .returning(ConversationModel)
        )
        result = await self._session.execute(stmt)
        row = result.scalar_one_or_none()

        if row is not None:
            return mapper.model_to_entity(row), True

        # Lost the race to a concurrent request for the same triple
        existing = await ConversationReaderRepo(self._session).get_by_participants(
            conversation.property_id,
            conversation.buyer_id,
            conversation.seller_id,
        )
        assert existing is not None
        return existing, False

    async def set_archived(
        self,
        conversation_id: UUID,
        is_archived: bool,
        ts: datetime,
    ) -> None:
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(is_archived=is_archived, updated_at=ts)
        )
        await self._session.execute(stmt)

    async def touch_last_message_at(
        self,
        conversation_id: UUID,
        ts: datetime,
    ) -> None:
        # GREATEST skips NULL; an interleaved older send never moves last_message_at back
        stmt = (
            update(ConversationModel)
            .where(ConversationModel.id == conversation_id)
            .values(
                last_message_at=func.greatest(ConversationModel.last_message_at, ts),
                updated_at=ts,
            )
        )
        await self._session.execute(stmt)
