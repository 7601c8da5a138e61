from __future__ import annotations

from enum import StrEnum


class MessageType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    FILE = "file"
    SYSTEM = "system"


class NotificationType(StrEnum):
    NEW_PROPERTY = "new_property"
    PRICE_DROP = "price_drop"
    INQUIRY_RESPONSE = "inquiry_response"
    VIEWING_CONFIRMED = "viewing_confirmed"
    NEW_MESSAGE = "new_message"
    PROPERTY_VIEWED = "property_viewed"
    INQUIRY_RECEIVED = "inquiry_received"
    FAVORITE_ADDED = "favorite_added"
    MESSAGE_RECEIVED = "message_received"
    VIEWING_REQUEST = "viewing_request"


class InquiryType(StrEnum):
    VIEWING = "viewing"
    GENERAL = "general"
    PRICE = "price"
    AVAILABILITY = "availability"


class ContactPreference(StrEnum):
    PHONE = "phone"
    EMAIL = "email"
    WHATSAPP = "whatsapp"
    MESSAGE = "message"


class InquiryStatus(StrEnum):
    PENDING = "pending"
    RESPONDED = "responded"
    CLOSED = "closed"


class RoomType(StrEnum):
    CONVERSATION = "conversation"
    PROPERTY = "property"


class PresenceStatus(StrEnum):
    ONLINE = "online"
    OFFLINE = "offline"
