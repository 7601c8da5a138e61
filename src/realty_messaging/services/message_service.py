from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone

from realty_messaging.application.dto.message import MessagePage, MessageWithSender
from realty_messaging.application.dto.principal import Principal
from realty_messaging.application.exceptions import NotFoundError
from realty_messaging.application.policies.permissions import assert_conversation_access
from realty_messaging.application.ports.dispatcher import EventDispatcher
from realty_messaging.application.uow import UnitOfWork
from realty_messaging.domain.entities.message import Message
from realty_messaging.domain.value_objects.enums import MessageType, NotificationType
from realty_messaging.domain.value_objects.rooms import conversation_room, user_room
from realty_messaging.services import notification_service

PREVIEW_LENGTH = 100


async def send_message(
    conversation_id: uuid.UUID,
    principal: Principal,
    content: str,
    msg_type: MessageType,
    attachment_url: str | None,
    uow: UnitOfWork,
    dispatcher: EventDispatcher,
) -> MessageWithSender:
    """Append a message from one participant to the other.

    The insert, the conversation timestamp bump and the recipient's
    notification commit together; realtime delivery happens afterwards.
    """
    conversation = assert_conversation_access(
        principal,
        await uow.conversations.get_by_id(conversation_id),
        action="send messages in",
    )
    recipient_id = conversation.other_participant(principal.user_id)

    msg = Message(
        id=uuid.uuid4(),
        conversation_id=conversation_id,
        sender_id=principal.user_id,
        recipient_id=recipient_id,
        content=content,
        type=msg_type.value,
        attachment_url=attachment_url,
        is_read=False,
        read_at=None,
        is_system_message=msg_type == MessageType.SYSTEM,
        created_at=datetime.now(timezone.utc),
    )
    msg = await uow.messages_w.create(msg)
    await uow.conversations_w.touch_last_message_at(conversation_id, msg.created_at)

    sender = await uow.users.get_profile(principal.user_id)
    await notification_service.create_notification(
        recipient_id,
        NotificationType.NEW_MESSAGE,
        "New Message",
        f"{sender.name if sender else 'Someone'} sent you a message",
        uow,
        property_id=conversation.property_id,
        data={
            "conversation_id": str(conversation_id),
            "message_id": str(msg.id),
            "preview": content[:PREVIEW_LENGTH],
        },
    )
    await uow.commit()

    view = MessageWithSender(message=msg, sender=sender)
    await dispatcher.emit(
        [conversation_room(conversation_id), user_room(recipient_id)],
        "new_message",
        view.to_payload(),
    )
    return view


async def mark_read(
    message_id: uuid.UUID,
    principal: Principal,
    uow: UnitOfWork,
    dispatcher: EventDispatcher,
) -> MessageWithSender:
    """Mark a message read by its recipient. Repeating the call changes nothing."""
    message = await uow.messages.get_by_id(message_id)
    # Same error whether the message is absent or addressed to someone else
    if message is None or message.recipient_id != principal.user_id:
        raise NotFoundError("Message not found or not authorized")

    if not message.is_read:
        now = datetime.now(timezone.utc)
        if await uow.messages_w.mark_read(message_id, principal.user_id, now):
            await uow.commit()
            message = replace(message, is_read=True, read_at=now)
            await dispatcher.emit(
                [conversation_room(message.conversation_id)],
                "message_read",
                {
                    "message_id": str(message.id),
                    "conversation_id": str(message.conversation_id),
                    "reader_id": str(principal.user_id),
                    "read_at": now.isoformat(),
                },
            )
        else:
            message = await uow.messages.get_by_id(message_id)  # type: ignore[assignment]

    sender = await uow.users.get_profile(message.sender_id)
    return MessageWithSender(message=message, sender=sender)


async def list_messages(
    conversation_id: uuid.UUID,
    principal: Principal,
    limit: int,
    offset: int,
    uow: UnitOfWork,
) -> MessagePage:
    """Page through a conversation; pages are cut newest-first and returned oldest-first."""
    conversation = await uow.conversations.get_by_id(conversation_id)
    assert_conversation_access(principal, conversation)

    newest_first = await uow.messages.list_newest_first(
        conversation_id, limit=limit, offset=offset,
    )
    total_count = await uow.messages.count(conversation_id)
    senders = await uow.users.get_profiles({m.sender_id for m in newest_first})

    return MessagePage(
        messages=[
            MessageWithSender(message=m, sender=senders.get(m.sender_id))
            for m in reversed(newest_first)
        ],
        total_count=total_count,
    )
