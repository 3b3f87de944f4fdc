from softouch.models.user import User
from softouch.models.event import Event
from softouch.models.registration import Registration, RegistrationStatus
from softouch.models.connection import Connection, ConnectionStatus
from softouch.models.notification import Notification, NotificationType
from softouch.models.reminder import Reminder
from softouch.models.post import Post, PostLike, PostComment
from softouch.models.message import Message

__all__ = [
    "User", "Event", "Registration", "RegistrationStatus",
    "Connection", "ConnectionStatus", "Notification", "NotificationType",
    "Reminder", "Post", "PostLike", "PostComment", "Message",
]
