"""
Event endpoints, including the registration lifecycle.
Listings are cached in Redis; single events never are.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.config import get_settings
from softouch.core.logging import get_logger
from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.base import as_utc
from softouch.schemas.event import (
    EventCreate,
    EventDetailResponse,
    EventListResponse,
    EventResponse,
    EventSort,
    MyRegisteredEvent,
)
from softouch.schemas.registration import (
    RegistrationActionResponse,
    RegistrationCreate,
    RegistrationResponse,
    RegistrationStatusUpdate,
)
from softouch.services import event_service, registration_service
from softouch.services.cache_service import get_cached_events, set_cached_events, invalidate_event_cache

logger = get_logger(__name__)
settings = get_settings()
router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=EventDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_data: EventCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a new event owned by the current user."""
    event = await event_service.create_event(db, event_data, user_id)
    await invalidate_event_cache()
    return event


@router.get("", response_model=EventListResponse)
async def list_events_endpoint(
    skills: Optional[str] = Query(None, description="Comma separated skill tags"),
    categories: Optional[str] = Query(None, description="Comma separated category tags"),
    location: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    sort_by: EventSort = Query(EventSort.date_desc, alias="sortBy"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=settings.EVENTS_PAGE_SIZE_MAX, alias="pageSize"),
    db: AsyncSession = Depends(get_db),
):
    """
    List events with filters, sorting and pagination.
    Results are cached in Redis until the next event or registration change.
    """
    start_date, end_date = as_utc(start_date), as_utc(end_date)
    params = {
        "skills": skills,
        "categories": categories,
        "location": location,
        "search": search,
        "start_date": start_date.isoformat() if start_date else None,
        "end_date": end_date.isoformat() if end_date else None,
        "sort_by": sort_by.value,
        "page": page,
        "page_size": page_size,
    }

    cached = await get_cached_events(params)
    if cached:
        logger.info("events_list_cache_hit", page=page)
        cached["cached"] = True
        return EventListResponse(**cached)

    events, total = await event_service.list_events(
        db,
        page=page,
        page_size=page_size,
        skills=skills,
        categories=categories,
        location=location,
        search=search,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
    )

    response_data = {
        "events": [EventResponse.model_validate(e).model_dump() for e in events],
        "total": total,
        "page": page,
        "page_size": page_size,
        "cached": False,
    }

    await set_cached_events(params, response_data)

    return EventListResponse(**response_data)


@router.get("/my-created", response_model=list[EventDetailResponse])
async def my_created_events(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Events the current user organizes, with their registration lists."""
    return await event_service.get_created_events(db, user_id)


@router.get("/my-registered", response_model=list[MyRegisteredEvent])
async def my_registered_events(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Events the current user registered for, each with that registration."""
    pairs = await event_service.get_registered_events(db, user_id)
    return [
        MyRegisteredEvent(
            **EventResponse.model_validate(event).model_dump(),
            my_registration=RegistrationResponse.model_validate(registration),
        )
        for event, registration in pairs
    ]


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event_endpoint(
    event_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Get a single event with its creator and registrants."""
    return await event_service.get_event(db, event_id)


@router.post(
    "/{event_id}/register",
    response_model=RegistrationActionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_event(
    event_id: int,
    payload: Optional[RegistrationCreate] = None,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Apply to attend an event. The registration starts as pending."""
    registration = await registration_service.register(
        db, event_id, user_id, payload.contact if payload else None
    )
    await invalidate_event_cache()
    return RegistrationActionResponse(
        message="Registered successfully",
        registration=RegistrationResponse.model_validate(registration),
    )


@router.put(
    "/{event_id}/registrations/{registration_id}/status",
    response_model=RegistrationActionResponse,
)
async def update_registration_status(
    event_id: int,
    registration_id: int,
    payload: RegistrationStatusUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Approve or reject a registration (organizer only)."""
    registration = await registration_service.set_status(
        db, event_id, registration_id, payload.status, user_id
    )
    await invalidate_event_cache()
    return RegistrationActionResponse(
        message=f"Registration {payload.status.value}",
        registration=RegistrationResponse.model_validate(registration),
    )


@router.put("/{event_id}/checkin/{registration_id}", response_model=RegistrationActionResponse)
async def check_in_registration(
    event_id: int,
    registration_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Check in an approved registrant (organizer only)."""
    registration = await registration_service.check_in(db, event_id, registration_id, user_id)
    await invalidate_event_cache()
    return RegistrationActionResponse(
        message="Checked in successfully",
        registration=RegistrationResponse.model_validate(registration),
    )
