"""Import all models so Base.metadata sees every table."""
from realty_messaging.infrastructure.db.models.conversation import ConversationModel
from realty_messaging.infrastructure.db.models.directory import PropertyModel, UserModel
from realty_messaging.infrastructure.db.models.inquiry import InquiryModel
from realty_messaging.infrastructure.db.models.message import MessageModel
from realty_messaging.infrastructure.db.models.notification import NotificationModel

__all__ = [
    "ConversationModel",
    "InquiryModel",
    "MessageModel",
    "NotificationModel",
    "PropertyModel",
    "UserModel",
]
