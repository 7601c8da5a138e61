from __future__ import annotations

import uuid

import pytest

from realty_messaging.application.dto.notification import NotificationFilterDTO
from realty_messaging.application.exceptions import NotFoundError
from realty_messaging.domain.value_objects.enums import NotificationType
from realty_messaging.services import notification_service
from tests.conftest import BUYER_ID, SELLER_ID, FakeUoW, make_notification


@pytest.mark.asyncio
async def test_create_notification_is_unread_and_not_committed():
    uow = FakeUoW()

    n = await notification_service.create_notification(
        SELLER_ID, NotificationType.PRICE_DROP, "Price drop", "Now cheaper", uow,
        data={"old": 100, "new": 90},
    )

    assert n.is_read is False
    assert n.type == "price_drop"
    assert n.data == {"old": 100, "new": 90}
    assert uow.committed is False


@pytest.mark.asyncio
async def test_list_notifications_filters_and_unread_count():
    uow = FakeUoW()
    prop_id = uuid.uuid4()
    for n in (
        make_notification(),
        make_notification(is_read=True),
        make_notification(type="price_drop", property_id=prop_id),
        make_notification(user_id=BUYER_ID),
    ):
        await uow.notifications_w.create(n)

    page = await notification_service.list_notifications(
        NotificationFilterDTO(user_id=SELLER_ID), uow,
    )
    assert len(page.notifications) == 3
    assert page.unread_count == 2

    only_unread = await notification_service.list_notifications(
        NotificationFilterDTO(user_id=SELLER_ID, is_read=False), uow,
    )
    assert all(not n.is_read for n in only_unread.notifications)

    by_property = await notification_service.list_notifications(
        NotificationFilterDTO(user_id=SELLER_ID, property_id=prop_id), uow,
    )
    assert [n.type for n in by_property.notifications] == ["price_drop"]
    # unread_count ignores filters
    assert by_property.unread_count == 2


@pytest.mark.asyncio
async def test_mark_read_is_idempotent(seller):
    uow = FakeUoW()
    n = await uow.notifications_w.create(make_notification())

    first = await notification_service.mark_read(n.id, seller, uow)
    second = await notification_service.mark_read(n.id, seller, uow)

    assert first.is_read is True
    assert second.read_at == first.read_at
    assert uow.commits == 1


@pytest.mark.asyncio
async def test_mark_read_other_users_notification_is_not_found(buyer):
    uow = FakeUoW()
    n = await uow.notifications_w.create(make_notification(user_id=SELLER_ID))

    with pytest.raises(NotFoundError):
        await notification_service.mark_read(n.id, buyer, uow)


@pytest.mark.asyncio
async def test_mark_all_read_returns_count(seller):
    uow = FakeUoW()
    for n in (make_notification(), make_notification(), make_notification(is_read=True)):
        await uow.notifications_w.create(n)

    assert await notification_service.mark_all_read(seller, uow) == 2
    assert await notification_service.mark_all_read(seller, uow) == 0
    assert await uow.notifications.count_unread(SELLER_ID) == 0
