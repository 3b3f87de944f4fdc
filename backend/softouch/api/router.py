"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from softouch.api.routes import auth, users, events, connections, notifications, reminders, messages, posts

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(events.router)
api_router.include_router(connections.router)
api_router.include_router(notifications.router)
api_router.include_router(reminders.router)
api_router.include_router(messages.router)
api_router.include_router(posts.router)
