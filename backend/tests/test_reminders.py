"""
Tests for event reminders.
"""

import pytest
from datetime import datetime, timezone, timedelta
from httpx import AsyncClient

from softouch.services import reminder_service


def _in_days(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


@pytest.mark.asyncio
async def test_set_and_list_reminder(client: AsyncClient, test_event, attendee_headers):
    response = await client.post(
        f"/api/reminders/{test_event.id}",
        json={"reminderDate": _in_days(29)},
        headers=attendee_headers,
    )
    assert response.status_code == 201
    reminder = response.json()["reminder"]
    assert reminder["eventId"] == test_event.id
    assert reminder["event"]["title"] == "Python Meetup"
    assert reminder["sent"] is False

    listed = (await client.get("/api/reminders/my", headers=attendee_headers)).json()
    assert [r["id"] for r in listed] == [reminder["id"]]


@pytest.mark.asyncio
async def test_reminder_must_be_in_future(client: AsyncClient, test_event, attendee_headers):
    response = await client.post(
        f"/api/reminders/{test_event.id}",
        json={"reminderDate": _in_days(-1)},
        headers=attendee_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Reminder date must be a future date"}


@pytest.mark.asyncio
async def test_one_reminder_per_event(client: AsyncClient, test_event, attendee_headers):
    await client.post(
        f"/api/reminders/{test_event.id}", json={"reminderDate": _in_days(5)}, headers=attendee_headers
    )
    response = await client.post(
        f"/api/reminders/{test_event.id}", json={"reminderDate": _in_days(6)}, headers=attendee_headers
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Reminder already set for this event"}


@pytest.mark.asyncio
async def test_reminder_for_unknown_event(client: AsyncClient, attendee_headers):
    response = await client.post(
        "/api/reminders/99999", json={"reminderDate": _in_days(5)}, headers=attendee_headers
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_cancel_reminder(client: AsyncClient, test_event, attendee_headers, other_headers):
    created = await client.post(
        f"/api/reminders/{test_event.id}", json={"reminderDate": _in_days(5)}, headers=attendee_headers
    )
    reminder_id = created.json()["reminder"]["id"]

    response = await client.delete(f"/api/reminders/{reminder_id}", headers=other_headers)
    assert response.status_code == 403
    assert response.json() == {"message": "User not authorized"}

    response = await client.delete(f"/api/reminders/{reminder_id}", headers=attendee_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Reminder cancelled successfully"}

    response = await client.delete(f"/api/reminders/{reminder_id}", headers=attendee_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_racing_duplicate_reminder_conflicts(
    client: AsyncClient, db_session, test_event, attendee_headers, monkeypatch
):
    """Two requests that both miss the lookup: the unique constraint decides."""
    event_id = test_event.id
    await client.post(
        f"/api/reminders/{event_id}", json={"reminderDate": _in_days(5)}, headers=attendee_headers
    )
    await db_session.commit()

    async def nothing_found(db, user_id, event_id):
        return None

    monkeypatch.setattr(reminder_service, "_existing_reminder", nothing_found)
    response = await client.post(
        f"/api/reminders/{event_id}", json={"reminderDate": _in_days(6)}, headers=attendee_headers
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Reminder already set for this event"}

    listed = (await client.get("/api/reminders/my", headers=attendee_headers)).json()
    assert len(listed) == 1
