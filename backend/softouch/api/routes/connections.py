"""
Connection (networking) endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.core.security import get_current_user_id
from softouch.db.session import get_db
from softouch.schemas.connection import ConnectionActionResponse, ConnectionResponse
from softouch.schemas.user import UserSummary
from softouch.services import connection_service

router = APIRouter(prefix="/connections", tags=["Connections"])


@router.post("/request/{receiver_id}", response_model=ConnectionActionResponse)
async def send_connection_request(
    receiver_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Send a connection request to another user."""
    connection = await connection_service.send_request(db, user_id, receiver_id)
    return ConnectionActionResponse(
        message="Connection request sent",
        connection=ConnectionResponse.model_validate(connection),
    )


@router.put("/accept/{request_id}", response_model=ConnectionActionResponse)
async def accept_connection_request(
    request_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Accept a request addressed to the current user."""
    connection = await connection_service.accept_request(db, request_id, user_id)
    return ConnectionActionResponse(
        message="Connection accepted",
        connection=ConnectionResponse.model_validate(connection),
    )


@router.put("/reject/{request_id}", response_model=ConnectionActionResponse)
async def reject_connection_request(
    request_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Reject a request addressed to the current user."""
    connection = await connection_service.reject_request(db, request_id, user_id)
    return ConnectionActionResponse(
        message="Connection rejected",
        connection=ConnectionResponse.model_validate(connection),
    )


@router.get("/my-connections", response_model=list[UserSummary])
async def my_connections(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Users the current user is connected with."""
    return await connection_service.get_connected_users(db, user_id)


@router.get("/my-requests", response_model=list[ConnectionResponse])
async def my_requests(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Pending requests received by the current user."""
    return await connection_service.get_pending_requests(db, user_id)
