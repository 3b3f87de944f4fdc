from softouch.schemas.user import UserCreate, UserLogin, UserResponse, UserSummary, ProfileUpdate, Token
from softouch.schemas.event import EventCreate, EventResponse, EventDetailResponse, EventListResponse, EventSort
from softouch.schemas.registration import RegistrationCreate, RegistrationStatusUpdate, RegistrationResponse
from softouch.schemas.connection import ConnectionResponse
from softouch.schemas.notification import NotificationResponse
from softouch.schemas.reminder import ReminderCreate, ReminderResponse
from softouch.schemas.post import PostCreate, CommentCreate, PostResponse
from softouch.schemas.message import MessageCreate, MessageResponse

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "UserSummary", "ProfileUpdate", "Token",
    "EventCreate", "EventResponse", "EventDetailResponse", "EventListResponse", "EventSort",
    "RegistrationCreate", "RegistrationStatusUpdate", "RegistrationResponse",
    "ConnectionResponse", "NotificationResponse", "ReminderCreate", "ReminderResponse",
    "PostCreate", "CommentCreate", "PostResponse", "MessageCreate", "MessageResponse",
]
