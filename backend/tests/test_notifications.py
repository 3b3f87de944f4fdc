"""
Tests for reading, marking and deleting notifications.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from softouch.models.notification import NotificationType
from softouch.services.notification_service import notify


async def _seed(db: AsyncSession, recipient_id: int, sender_id: int, count: int = 1) -> list[int]:
    ids = []
    for n in range(count):
        notification = await notify(
            db,
            recipient_id=recipient_id,
            notification_type=NotificationType.event_update,
            message=f"Update {n}",
            sender_id=sender_id,
        )
        ids.append(notification.id)
    return ids


@pytest.mark.asyncio
async def test_list_newest_first(client: AsyncClient, db_session, organizer, attendee, attendee_headers):
    await _seed(db_session, attendee.id, organizer.id, count=3)

    response = await client.get("/api/notifications/my", headers=attendee_headers)
    assert response.status_code == 200
    assert [n["message"] for n in response.json()] == ["Update 2", "Update 1", "Update 0"]


@pytest.mark.asyncio
async def test_only_own_notifications_listed(
    client: AsyncClient, db_session, organizer, attendee, organizer_headers
):
    await _seed(db_session, attendee.id, organizer.id)
    response = await client.get("/api/notifications/my", headers=organizer_headers)
    assert response.json() == []


@pytest.mark.asyncio
async def test_mark_read(client: AsyncClient, db_session, organizer, attendee, attendee_headers):
    [notification_id] = await _seed(db_session, attendee.id, organizer.id)

    response = await client.put(f"/api/notifications/{notification_id}/read", headers=attendee_headers)
    assert response.status_code == 200
    assert response.json()["notification"]["read"] is True

    listed = (await client.get("/api/notifications/my", headers=attendee_headers)).json()
    assert listed[0]["read"] is True


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_notification(
    client: AsyncClient, db_session, organizer, attendee, other_headers
):
    [notification_id] = await _seed(db_session, attendee.id, organizer.id)

    response = await client.put(f"/api/notifications/{notification_id}/read", headers=other_headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Notification not found or not authorized"}

    response = await client.delete(f"/api/notifications/{notification_id}", headers=other_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_notification(client: AsyncClient, db_session, organizer, attendee, attendee_headers):
    [notification_id] = await _seed(db_session, attendee.id, organizer.id)

    response = await client.delete(f"/api/notifications/{notification_id}", headers=attendee_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Notification deleted"}

    listed = (await client.get("/api/notifications/my", headers=attendee_headers)).json()
    assert listed == []
