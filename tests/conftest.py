"""Shared test fixtures."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence
from uuid import UUID

import pytest

from realty_messaging.application.dto.conversation import (
    ConversationFilterDTO,
    ConversationSummary,
)
from realty_messaging.application.dto.inquiry import InquiryFilterDTO, InquirySummary
from realty_messaging.application.dto.notification import NotificationFilterDTO
from realty_messaging.application.dto.principal import Principal
from realty_messaging.domain.entities.conversation import Conversation
from realty_messaging.domain.entities.directory import PropertyRef, UserProfile
from realty_messaging.domain.entities.inquiry import Inquiry
from realty_messaging.domain.entities.message import Message
from realty_messaging.domain.entities.notification import Notification
from realty_messaging.domain.value_objects.enums import (
    ContactPreference,
    InquiryStatus,
    InquiryType,
    MessageType,
)

BUYER_ID = UUID("00000000-0000-0000-0000-00000000000b")
SELLER_ID = UUID("00000000-0000-0000-0000-000000000005")
STRANGER_ID = UUID("00000000-0000-0000-0000-00000000000e")


@pytest.fixture
def buyer() -> Principal:
    return Principal(user_id=BUYER_ID)


@pytest.fixture
def seller() -> Principal:
    return Principal(user_id=SELLER_ID)


@pytest.fixture
def stranger() -> Principal:
    return Principal(user_id=STRANGER_ID)


@pytest.fixture
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def make_profile(user_id: UUID, name: str = "Someone", user_type: str = "buyer") -> UserProfile:
    return UserProfile(id=user_id, name=name, profile_photo=None, user_type=user_type)


def make_property(
    *,
    property_id: UUID | None = None,
    owner_id: UUID = SELLER_ID,
    title: str = "Two-bed flat",
) -> PropertyRef:
    return PropertyRef(id=property_id or uuid.uuid4(), owner_id=owner_id, title=title)


def make_conversation(
    *,
    conversation_id: UUID | None = None,
    property_id: UUID | None = None,
    buyer_id: UUID = BUYER_ID,
    seller_id: UUID = SELLER_ID,
    is_archived: bool = False,
) -> Conversation:
    now = _now()
    return Conversation(
        id=conversation_id or uuid.uuid4(),
        property_id=property_id or uuid.uuid4(),
        buyer_id=buyer_id,
        seller_id=seller_id,
        last_message_at=None,
        is_archived=is_archived,
        created_at=now,
        updated_at=now,
    )


def make_message(
    *,
    conversation_id: UUID,
    sender_id: UUID = BUYER_ID,
    recipient_id: UUID = SELLER_ID,
    content: str = "hello",
    is_read: bool = False,
    created_at: datetime | None = None,
) -> Message:
    return Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=sender_id,
        recipient_id=recipient_id,
        content=content,
        type=MessageType.TEXT.value,
        attachment_url=None,
        is_read=is_read,
        read_at=_now() if is_read else None,
        is_system_message=False,
        created_at=created_at or _now(),
    )


def make_notification(
    *,
    user_id: UUID = SELLER_ID,
    type: str = "new_message",
    is_read: bool = False,
    property_id: UUID | None = None,
) -> Notification:
    return Notification(
        id=uuid.uuid4(),
        user_id=user_id,
        type=type,
        title="New Message",
        message="Someone sent you a message",
        data=None,
        property_id=property_id,
        is_read=is_read,
        read_at=_now() if is_read else None,
        created_at=_now(),
    )


def make_inquiry(
    *,
    property_id: UUID,
    user_id: UUID = BUYER_ID,
    status: str = InquiryStatus.PENDING.value,
) -> Inquiry:
    now = _now()
    return Inquiry(
        id=uuid.uuid4(),
        property_id=property_id,
        user_id=user_id,
        inquiry_type=InquiryType.VIEWING.value,
        message="Can I see it on Saturday?",
        contact_preference=ContactPreference.EMAIL.value,
        phone_number=None,
        email="buyer@example.com",
        preferred_viewing_date=None,
        preferred_viewing_time=None,
        status=status,
        response_message=None,
        responded_at=None,
        created_at=now,
        updated_at=now,
    )


@dataclass
class RecordedEvent:
    rooms: list[str] | None
    event: str
    data: dict[str, Any]
    exclude: str | None


@dataclass
class RecordingDispatcher:
    """Captures emits instead of delivering them."""

    events: list[RecordedEvent] = field(default_factory=list)

    async def emit(
        self,
        rooms: Sequence[str],
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        self.events.append(RecordedEvent(list(rooms), event, data, exclude))

    async def broadcast(
        self,
        event: str,
        data: dict[str, Any],
        *,
        exclude: str | None = None,
    ) -> None:
        self.events.append(RecordedEvent(None, event, data, exclude))

    def named(self, event: str) -> list[RecordedEvent]:
        return [e for e in self.events if e.event == event]


@dataclass
class FakeMessageReader:
    _store: dict[UUID, Message] = field(default_factory=dict)

    async def get_by_id(self, message_id: UUID) -> Message | None:
        return self._store.get(message_id)

    async def list_newest_first(
        self, conversation_id: UUID, *, limit: int = 50, offset: int = 0,
    ) -> list[Message]:
        msgs = sorted(
            (m for m in self._store.values() if m.conversation_id == conversation_id),
            key=lambda m: m.created_at,
            reverse=True,
        )
        return msgs[offset:offset + limit]

    async def count(self, conversation_id: UUID) -> int:
        return sum(1 for m in self._store.values() if m.conversation_id == conversation_id)


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def create(self, message: Message) -> Message:
        self._reader._store[message.id] = message
        return message

    async def mark_read(self, message_id: UUID, recipient_id: UUID, ts: datetime) -> bool:
        m = self._reader._store.get(message_id)
        if m is None or m.recipient_id != recipient_id or m.is_read:
            return False
        self._reader._store[message_id] = replace(m, is_read=True, read_at=ts)
        return True


@dataclass
class FakeConversationReader:
    _messages: FakeMessageReader
    _store: dict[UUID, Conversation] = field(default_factory=dict)

    async def get_by_id(self, conversation_id: UUID) -> Conversation | None:
        return self._store.get(conversation_id)

    async def get_by_participants(
        self, property_id: UUID, buyer_id: UUID, seller_id: UUID,
    ) -> Conversation | None:
        for c in self._store.values():
            if (c.property_id, c.buyer_id, c.seller_id) == (property_id, buyer_id, seller_id):
                return c
        return None

    async def list_for_user(self, filters: ConversationFilterDTO) -> list[ConversationSummary]:
        convs = [
            c for c in self._store.values()
            if c.is_participant(filters.user_id)
            and c.is_archived == filters.is_archived
            and (filters.property_id is None or c.property_id == filters.property_id)
        ]
        summaries = []
        for c in convs[filters.offset:filters.offset + filters.limit]:
            msgs = [m for m in self._messages._store.values() if m.conversation_id == c.id]
            unread = sum(1 for m in msgs if m.recipient_id == filters.user_id and not m.is_read)
            latest = max(msgs, key=lambda m: m.created_at, default=None)
            summaries.append(
                ConversationSummary(
                    conversation=c,
                    property_title=None,
                    buyer_name=None,
                    buyer_photo=None,
                    seller_name=None,
                    seller_photo=None,
                    last_message_content=latest.content if latest else None,
                    unread_count=unread,
                )
            )
        return summaries


@dataclass
class FakeConversationWriter:
    _reader: FakeConversationReader

    async def create_if_not_exists(self, conversation: Conversation) -> tuple[Conversation, bool]:
        # Mirrors uq_conversation_participants: checks the rows, not the reader
        key = (conversation.property_id, conversation.buyer_id, conversation.seller_id)
        for existing in self._reader._store.values():
            if (existing.property_id, existing.buyer_id, existing.seller_id) == key:
                return existing, False
        self._reader._store[conversation.id] = conversation
        return conversation, True

    async def set_archived(self, conversation_id: UUID, is_archived: bool, ts: datetime) -> None:
        c = self._reader._store[conversation_id]
        self._reader._store[conversation_id] = replace(c, is_archived=is_archived, updated_at=ts)

    async def touch_last_message_at(self, conversation_id: UUID, ts: datetime) -> None:
        c = self._reader._store[conversation_id]
        latest = ts if c.last_message_at is None else max(c.last_message_at, ts)
        self._reader._store[conversation_id] = replace(c, last_message_at=latest, updated_at=ts)


@dataclass
class FakeNotificationReader:
    _store: dict[UUID, Notification] = field(default_factory=dict)

    async def get_for_user(self, notification_id: UUID, user_id: UUID) -> Notification | None:
        n = self._store.get(notification_id)
        return n if n is not None and n.user_id == user_id else None

    async def list_for_user(self, filters: NotificationFilterDTO) -> list[Notification]:
        items = [
            n for n in self._store.values()
            if n.user_id == filters.user_id
            and (filters.is_read is None or n.is_read == filters.is_read)
            and (filters.type is None or n.type == filters.type)
            and (filters.property_id is None or n.property_id == filters.property_id)
        ]
        items.sort(key=lambda n: n.created_at, reverse=True)
        return items[filters.offset:filters.offset + filters.limit]

    async def count_unread(self, user_id: UUID) -> int:
        return sum(1 for n in self._store.values() if n.user_id == user_id and not n.is_read)

    def for_user(self, user_id: UUID) -> list[Notification]:
        return [n for n in self._store.values() if n.user_id == user_id]


@dataclass
class FakeNotificationWriter:
    _reader: FakeNotificationReader

    async def create(self, notification: Notification) -> Notification:
        self._reader._store[notification.id] = notification
        return notification

    async def mark_read(self, notification_id: UUID, user_id: UUID, ts: datetime) -> bool:
        n = await self._reader.get_for_user(notification_id, user_id)
        if n is None or n.is_read:
            return False
        self._reader._store[notification_id] = replace(n, is_read=True, read_at=ts)
        return True

    async def mark_all_read(self, user_id: UUID, ts: datetime) -> int:
        updated = 0
        for n in list(self._reader._store.values()):
            if n.user_id == user_id and not n.is_read:
                self._reader._store[n.id] = replace(n, is_read=True, read_at=ts)
                updated += 1
        return updated


@dataclass
class FakeInquiryReader:
    _users: FakeUserDirectory
    _properties: FakePropertyDirectory
    _store: dict[UUID, Inquiry] = field(default_factory=dict)

    async def get_by_id(self, inquiry_id: UUID) -> Inquiry | None:
        return self._store.get(inquiry_id)

    async def search(self, filters: InquiryFilterDTO) -> list[InquirySummary]:
        matches = [
            i for i in self._store.values()
            if (filters.property_id is None or i.property_id == filters.property_id)
            and (filters.user_id is None or i.user_id == filters.user_id)
            and (filters.status is None or i.status == filters.status)
            and (filters.inquiry_type is None or i.inquiry_type == filters.inquiry_type)
        ]
        summaries = []
        for i in matches:
            prop = self._properties._store.get(i.property_id)
            user = self._users._store.get(i.user_id)
            summaries.append(
                InquirySummary(
                    inquiry=i,
                    property_title=prop.title if prop else None,
                    inquirer_name=user.name if user else None,
                    inquirer_photo=user.profile_photo if user else None,
                    inquirer_type=user.user_type if user else None,
                )
            )
        return summaries


@dataclass
class FakeInquiryWriter:
    _reader: FakeInquiryReader

    async def create(self, inquiry: Inquiry) -> Inquiry:
        self._reader._store[inquiry.id] = inquiry
        return inquiry

    async def update(self, inquiry_id: UUID, values: dict[str, Any], ts: datetime) -> Inquiry:
        updated = replace(self._reader._store[inquiry_id], **values, updated_at=ts)
        self._reader._store[inquiry_id] = updated
        return updated


@dataclass
class FakeUserDirectory:
    _store: dict[UUID, UserProfile] = field(default_factory=dict)

    async def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self._store.get(user_id)

    async def get_profiles(self, user_ids: Iterable[UUID]) -> dict[UUID, UserProfile]:
        return {uid: self._store[uid] for uid in user_ids if uid in self._store}


@dataclass
class FakePropertyDirectory:
    _store: dict[UUID, PropertyRef] = field(default_factory=dict)

    async def get(self, property_id: UUID) -> PropertyRef | None:
        return self._store.get(property_id)


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    conversations: FakeConversationReader | None = None
    conversations_w: FakeConversationWriter | None = None
    notifications: FakeNotificationReader = field(default_factory=FakeNotificationReader)
    notifications_w: FakeNotificationWriter | None = None
    inquiries: FakeInquiryReader | None = None
    inquiries_w: FakeInquiryWriter | None = None
    users: FakeUserDirectory = field(default_factory=FakeUserDirectory)
    properties: FakePropertyDirectory = field(default_factory=FakePropertyDirectory)
    commits: int = 0

    def __post_init__(self) -> None:
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)
        if self.conversations is None:
            self.conversations = FakeConversationReader(self.messages)
        if self.conversations_w is None:
            self.conversations_w = FakeConversationWriter(self.conversations)
        if self.notifications_w is None:
            self.notifications_w = FakeNotificationWriter(self.notifications)
        if self.inquiries is None:
            self.inquiries = FakeInquiryReader(self.users, self.properties)
        if self.inquiries_w is None:
            self.inquiries_w = FakeInquiryWriter(self.inquiries)

    @property
    def committed(self) -> bool:
        return self.commits > 0

    def add_user(self, profile: UserProfile) -> UserProfile:
        self.users._store[profile.id] = profile
        return profile

    def add_property(self, prop: PropertyRef) -> PropertyRef:
        self.properties._store[prop.id] = prop
        return prop

    def add_conversation(self, conv: Conversation) -> Conversation:
        self.conversations._store[conv.id] = conv
        return conv

    def add_message(self, msg: Message) -> Message:
        self.messages._store[msg.id] = msg
        return msg

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass

    async def __aenter__(self) -> FakeUoW:
        return self

    async def __aexit__(self, *exc: object) -> None:
        pass
