"""
Event service handling creation, lookup and filtered listing.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from softouch.core.exceptions import InvalidInputError, NotFoundError
from softouch.core.logging import get_logger
from softouch.models.event import Event
from softouch.models.registration import Registration
from softouch.schemas.base import split_tags
from softouch.schemas.event import EventCreate, EventSort

logger = get_logger(__name__)

_SORT_ORDER = {
    EventSort.date_desc: (Event.date.desc(), Event.id.desc()),
    EventSort.date_asc: (Event.date.asc(), Event.id.asc()),
    EventSort.title: (Event.title.asc(), Event.id.asc()),
}


def _event_query():
    return select(Event).options(
        selectinload(Event.created_by),
        selectinload(Event.registrations).selectinload(Registration.user),
    )


async def get_event(db: AsyncSession, event_id: int) -> Event:
    """
    Load a single event with its creator and registrants.
    Always re-reads the row so callers see their own committed changes.
    """
    result = await db.execute(
        _event_query()
        .where(Event.id == event_id)
        .execution_options(populate_existing=True)
    )
    event = result.scalar_one_or_none()

    if not event:
        raise NotFoundError("Event not found")
    return event


async def create_event(db: AsyncSession, event_data: EventCreate, creator_id: int) -> Event:
    """Create a new event owned by the current user."""
    if event_data.date <= datetime.now(timezone.utc):
        raise InvalidInputError("Event date must be in the future")

    event = Event(
        title=event_data.title,
        description=event_data.description,
        organizer=event_data.organizer,
        organizer_email=event_data.organizer_email,
        event_image=event_data.event_image,
        date=event_data.date,
        location=event_data.location,
        skills_required=event_data.skills_required,
        categories=event_data.categories,
        created_by_id=creator_id,
    )
    db.add(event)
    await db.commit()

    logger.info("event_created", event_id=event.id, title=event.title, created_by=creator_id)
    return await get_event(db, event.id)


def _matches_any(tags: list[str], wanted: list[str]) -> bool:
    have = {t.lower() for t in tags or []}
    return any(w.lower() in have for w in wanted)


async def list_events(
    db: AsyncSession,
    page: int = 1,
    page_size: int = 20,
    skills: Optional[str] = None,
    categories: Optional[str] = None,
    location: Optional[str] = None,
    search: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    sort_by: EventSort = EventSort.date_desc,
) -> tuple[list[Event], int]:
    """
    List events matching every supplied filter.

    Location and search are case-insensitive substring matches run in SQL.
    Skills and categories are comma lists matched case-insensitively against
    the event's tags (any overlap); they live in JSON columns, so that part
    of the filter runs here, before pagination.
    """
    query = _event_query()

    if location:
        query = query.where(Event.location.ilike(f"%{location.strip()}%"))
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Event.title.ilike(pattern),
                Event.description.ilike(pattern),
                Event.organizer.ilike(pattern),
            )
        )
    if start_date:
        query = query.where(Event.date >= start_date)
    if end_date:
        query = query.where(Event.date <= end_date)

    query = query.order_by(*_SORT_ORDER[sort_by])
    result = await db.execute(query)
    events = list(result.scalars().all())

    wanted_skills = split_tags(skills)
    if wanted_skills:
        events = [e for e in events if _matches_any(e.skills_required, wanted_skills)]
    wanted_categories = split_tags(categories)
    if wanted_categories:
        events = [e for e in events if _matches_any(e.categories, wanted_categories)]

    total = len(events)
    offset = (page - 1) * page_size
    return events[offset:offset + page_size], total


async def get_created_events(db: AsyncSession, user_id: int) -> list[Event]:
    """Events created by a user, newest first."""
    result = await db.execute(
        _event_query()
        .where(Event.created_by_id == user_id)
        .order_by(Event.date.desc(), Event.id.desc())
    )
    return list(result.scalars().all())


async def get_registered_events(db: AsyncSession, user_id: int) -> list[tuple[Event, Registration]]:
    """Events a user has a registration for, paired with that registration."""
    result = await db.execute(
        _event_query()
        .join(Registration, Registration.event_id == Event.id)
        .where(Registration.user_id == user_id)
        .order_by(Event.date.desc(), Event.id.desc())
    )
    events = list(result.scalars().unique().all())
    return [(event, event.registration_for(user_id)) for event in events]
