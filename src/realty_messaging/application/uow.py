from __future__ import annotations

from typing import Protocol

from realty_messaging.application.repositories.conversation import (
    ConversationReader,
    ConversationWriter,
)
from realty_messaging.application.repositories.directory import (
    PropertyDirectory,
    UserDirectory,
)
from realty_messaging.application.repositories.inquiry import InquiryReader, InquiryWriter
from realty_messaging.application.repositories.message import MessageReader, MessageWriter
from realty_messaging.application.repositories.notification import (
    NotificationReader,
    NotificationWriter,
)


class UnitOfWork(Protocol):
    conversations: ConversationReader
    conversations_w: ConversationWriter
    messages: MessageReader
    messages_w: MessageWriter
    notifications: NotificationReader
    notifications_w: NotificationWriter
    inquiries: InquiryReader
    inquiries_w: InquiryWriter
    users: UserDirectory
    properties: PropertyDirectory

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...
