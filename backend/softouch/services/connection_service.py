"""
Connection (networking) workflow: request, then accept or reject.

One row represents the relationship between two users regardless of who
asked first. Before inserting, both orderings of the pair are looked up:

  existing status   requester is...   outcome
  ---------------   ---------------   -------------------------------------
  accepted          either            Conflict "Already connected"
  pending           sender            Conflict "request already sent"
  pending           receiver          Conflict "respond to their request"
  rejected          either            row re-opened as pending, requester
                                      becomes the sender
  (none)                              new pending row
"""

from sqlalchemy import select, or_, and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.exceptions import ConflictError, ForbiddenError, InvalidInputError, NotFoundError
from softouch.core.logging import get_logger
from softouch.core.metrics import record_connection_action
from softouch.models.connection import Connection, ConnectionStatus
from softouch.models.notification import NotificationType
from softouch.models.user import User
from softouch.services import notification_service
from softouch.services.user_service import get_user

logger = get_logger(__name__)


async def _load_connection(db: AsyncSession, connection_id: int) -> Connection:
    result = await db.execute(
        select(Connection)
        .where(Connection.id == connection_id)
        .execution_options(populate_existing=True)
    )
    connection = result.scalar_one_or_none()
    if not connection:
        raise NotFoundError("Connection request not found")
    return connection


async def _find_between(db: AsyncSession, user_a: int, user_b: int) -> Connection | None:
    result = await db.execute(
        select(Connection).where(
            or_(
                and_(Connection.sender_id == user_a, Connection.receiver_id == user_b),
                and_(Connection.sender_id == user_b, Connection.receiver_id == user_a),
            )
        )
    )
    return result.scalars().first()


async def send_request(db: AsyncSession, sender_id: int, receiver_id: int) -> Connection:
    """Open a pending connection request from sender to receiver."""
    if sender_id == receiver_id:
        raise InvalidInputError("You cannot send a connection request to yourself")

    sender: User = await get_user(db, sender_id)
    await get_user(db, receiver_id)

    existing = await _find_between(db, sender_id, receiver_id)
    if existing and existing.status == ConnectionStatus.accepted.value:
        record_connection_action("request", "conflict")
        raise ConflictError("Already connected with this user")
    if existing and existing.status == ConnectionStatus.pending.value:
        record_connection_action("request", "conflict")
        if existing.sender_id == sender_id:
            raise ConflictError("Connection request already sent")
        raise ConflictError("You have a pending request from this user. Please accept or reject it.")

    if existing:
        # Previously rejected: reuse the row so the pair keeps a single record
        existing.sender_id = sender_id
        existing.receiver_id = receiver_id
        existing.status = ConnectionStatus.pending.value
        connection = existing
        logger.info("connection_request_reopened", connection_id=existing.id, sender_id=sender_id)
    else:
        connection = Connection(
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=ConnectionStatus.pending.value,
        )
        db.add(connection)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent request for the same pair was stored first
        await db.rollback()
        record_connection_action("request", "conflict")
        raise ConflictError("Connection request already sent")

    record_connection_action("request", "ok")
    logger.info(
        "connection_requested",
        connection_id=connection.id,
        sender_id=sender_id,
        receiver_id=receiver_id,
    )
    await notification_service.notify(
        db,
        recipient_id=receiver_id,
        notification_type=NotificationType.connection_request,
        message=f"{sender.name} sent you a connection request.",
        sender_id=sender_id,
    )
    return await _load_connection(db, connection.id)


async def _respond(
    db: AsyncSession,
    connection_id: int,
    acting_user_id: int,
    target: ConnectionStatus,
) -> Connection:
    action = "accept" if target == ConnectionStatus.accepted else "reject"
    connection = await _load_connection(db, connection_id)

    if connection.receiver_id != acting_user_id:
        raise ForbiddenError(f"Not authorized to {action} this request")
    if connection.status == target.value:
        record_connection_action(action, "conflict")
        raise ConflictError(f"Connection already {target.value}")

    connection.status = target.value
    await db.commit()

    record_connection_action(action, "ok")
    logger.info(f"connection_{target.value}", connection_id=connection_id, user_id=acting_user_id)
    return connection


async def accept_request(db: AsyncSession, connection_id: int, acting_user_id: int) -> Connection:
    connection = await _respond(db, connection_id, acting_user_id, ConnectionStatus.accepted)
    await notification_service.notify(
        db,
        recipient_id=connection.sender_id,
        notification_type=NotificationType.connection_accepted,
        message=f"{connection.receiver.name} accepted your connection request.",
        sender_id=acting_user_id,
    )
    return await _load_connection(db, connection_id)


async def reject_request(db: AsyncSession, connection_id: int, acting_user_id: int) -> Connection:
    await _respond(db, connection_id, acting_user_id, ConnectionStatus.rejected)
    return await _load_connection(db, connection_id)


async def get_connected_users(db: AsyncSession, user_id: int) -> list[User]:
    """The other party of every accepted connection involving the user."""
    result = await db.execute(
        select(Connection)
        .where(
            or_(Connection.sender_id == user_id, Connection.receiver_id == user_id),
            Connection.status == ConnectionStatus.accepted.value,
        )
        .order_by(Connection.updated_at.desc())
    )
    return [connection.other_party(user_id) for connection in result.scalars().all()]


async def get_pending_requests(db: AsyncSession, user_id: int) -> list[Connection]:
    """Pending requests the user has received."""
    result = await db.execute(
        select(Connection)
        .where(
            Connection.receiver_id == user_id,
            Connection.status == ConnectionStatus.pending.value,
        )
        .order_by(Connection.created_at.desc())
    )
    return list(result.scalars().all())
