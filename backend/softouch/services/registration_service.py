"""
Registration lifecycle for event attendance.

STATE MACHINE
=============

    register          organizer decision          organizer check-in
  ----------> pending -----------------> approved -----------------> approved + checked_in
                  |                          |
                  +-------> rejected <-------+   (only before check-in)

  - A new registration always starts as pending with checked_in = False.
  - Only the event's creator moves a registration between states.
  - rejected is terminal, and so is a checked-in registration.
  - Nothing ever returns to pending, and check-in cannot be undone.
    Checking in an already checked-in registration changes nothing.
  - A user gets exactly one registration per event. Any existing
    registration, including a rejected one, blocks registering again.

Each mutation touches one registration row, so there is no locking here.
Every mutation is committed before returning, so the listing cache is
never invalidated ahead of the write it reflects.
The registrant is told about status changes through a notification that is
written after the status change is committed (see notification_service).
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from softouch.core.logging import get_logger
from softouch.core.metrics import record_registration_attempt, record_registration_transition
from softouch.models.event import Event
from softouch.models.notification import NotificationType
from softouch.models.registration import Registration, RegistrationStatus
from softouch.services import notification_service
from softouch.services.event_service import get_event

logger = get_logger(__name__)

# Allowed organizer decisions, keyed by current status
ALLOWED_TRANSITIONS: dict[RegistrationStatus, set[RegistrationStatus]] = {
    RegistrationStatus.pending: {RegistrationStatus.approved, RegistrationStatus.rejected},
    RegistrationStatus.approved: {RegistrationStatus.rejected},
    RegistrationStatus.rejected: set(),
}


def _status_message(event: Event, status: RegistrationStatus) -> str:
    return f"Your registration for '{event.title}' has been {status.value}."


async def _get_owned_registration(
    db: AsyncSession,
    event_id: int,
    registration_id: int,
    acting_user_id: int,
) -> tuple[Event, Registration]:
    event = await get_event(db, event_id)

    if event.created_by_id != acting_user_id:
        logger.warning(
            "registration_action_forbidden",
            event_id=event_id,
            registration_id=registration_id,
            acting_user_id=acting_user_id,
        )
        raise ForbiddenError("Only the event organizer can manage registrations")

    registration = event.find_registration(registration_id)
    if not registration:
        raise NotFoundError("Registration not found")
    return event, registration


async def register(
    db: AsyncSession,
    event_id: int,
    user_id: int,
    contact: Optional[str] = None,
) -> Registration:
    """Append a pending registration for the user."""
    event = await get_event(db, event_id)

    if event.registration_for(user_id):
        record_registration_attempt("duplicate")
        logger.info("registration_duplicate", event_id=event_id, user_id=user_id)
        raise ConflictError("Already registered for this event")

    registration = Registration(
        user_id=user_id,
        status=RegistrationStatus.pending.value,
        checked_in=False,
        contact=contact,
    )
    event.registrations.append(registration)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent request from the same user won the unique constraint
        await db.rollback()
        record_registration_attempt("duplicate")
        raise ConflictError("Already registered for this event")

    record_registration_attempt("created")
    logger.info(
        "registration_created",
        registration_id=registration.id,
        event_id=event_id,
        user_id=user_id,
    )
    event = await get_event(db, event_id)
    return event.find_registration(registration.id)


async def set_status(
    db: AsyncSession,
    event_id: int,
    registration_id: int,
    new_status: RegistrationStatus,
    acting_user_id: int,
) -> Registration:
    """
    Organizer decision on a registration.

    The status change is committed first; the registrant's notification is a
    separate best-effort write whose failure leaves the new status in place.
    """
    event, registration = await _get_owned_registration(db, event_id, registration_id, acting_user_id)
    current = RegistrationStatus(registration.status)

    if current == new_status:
        raise ConflictError(f"Registration is already {new_status.value}")
    if registration.checked_in:
        raise InvalidStateError("Registration is already checked in")
    if new_status not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStateError(
            f"Cannot change registration from {current.value} to {new_status.value}"
        )

    registration.status = new_status.value
    registrant_id = registration.user_id
    await db.commit()

    record_registration_transition(new_status.value)
    logger.info(
        "registration_status_changed",
        event_id=event_id,
        registration_id=registration_id,
        from_status=current.value,
        to_status=new_status.value,
    )

    await notification_service.notify(
        db,
        recipient_id=registrant_id,
        notification_type=NotificationType.registration_status,
        message=_status_message(event, new_status),
        sender_id=acting_user_id,
        event_id=event_id,
    )

    event = await get_event(db, event_id)
    return event.find_registration(registration_id)


async def check_in(
    db: AsyncSession,
    event_id: int,
    registration_id: int,
    acting_user_id: int,
) -> Registration:
    """Mark an approved registrant as present. Repeating it changes nothing."""
    event, registration = await _get_owned_registration(db, event_id, registration_id, acting_user_id)

    if registration.status != RegistrationStatus.approved.value:
        raise InvalidStateError("Only approved registrations can be checked in")
    if registration.checked_in:
        return registration

    registration.checked_in = True
    await db.commit()

    record_registration_transition("checked_in")
    logger.info(
        "registration_checked_in",
        event_id=event_id,
        registration_id=registration_id,
        user_id=registration.user_id,
    )
    return registration
