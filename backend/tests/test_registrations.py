"""
Tests for the registration lifecycle: register, organizer decisions and
check-in, including the status-change notification.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from conftest import make_user, headers_for, track_commits_and_invalidation
from softouch.services import notification_service


async def _register(client: AsyncClient, event_id: int, headers: dict, contact: str = None):
    body = {"contact": contact} if contact else None
    return await client.post(f"/api/events/{event_id}/register", json=body, headers=headers)


async def _set_status(client: AsyncClient, event_id: int, registration_id: int, status: str, headers: dict):
    return await client.put(
        f"/api/events/{event_id}/registrations/{registration_id}/status",
        json={"status": status},
        headers=headers,
    )


async def _check_in(client: AsyncClient, event_id: int, registration_id: int, headers: dict):
    return await client.put(f"/api/events/{event_id}/checkin/{registration_id}", headers=headers)


@pytest.mark.asyncio
async def test_full_registration_scenario(
    client: AsyncClient, test_event, attendee, organizer_headers, attendee_headers
):
    """Register, approve, check in; registering twice is refused."""
    event_id, attendee_id = test_event.id, attendee.id

    response = await _register(client, event_id, attendee_headers, "u1@x.com")
    assert response.status_code == 201
    registration = response.json()["registration"]
    assert registration["status"] == "pending"
    assert registration["checkedIn"] is False
    assert registration["contact"] == "u1@x.com"
    assert registration["userId"] == attendee_id
    registration_id = registration["id"]

    response = await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Registration approved"
    assert response.json()["registration"]["status"] == "approved"

    notifications = (await client.get("/api/notifications/my", headers=attendee_headers)).json()
    assert len(notifications) == 1
    assert notifications[0]["type"] == "registration_status"
    assert notifications[0]["recipientId"] == attendee_id
    assert notifications[0]["event"]["id"] == event_id
    assert notifications[0]["read"] is False
    assert "approved" in notifications[0]["message"]

    response = await _check_in(client, event_id, registration_id, organizer_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Checked in successfully"
    assert response.json()["registration"]["checkedIn"] is True

    response = await _register(client, event_id, attendee_headers, "u1@x.com")
    assert response.status_code == 400
    assert response.json() == {"message": "Already registered for this event"}


@pytest.mark.asyncio
async def test_register_without_body(client: AsyncClient, test_event, attendee_headers):
    response = await _register(client, test_event.id, attendee_headers)
    assert response.status_code == 201
    assert response.json()["registration"]["contact"] is None


@pytest.mark.asyncio
async def test_register_unknown_event(client: AsyncClient, attendee_headers):
    response = await _register(client, 99999, attendee_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_register_requires_auth(client: AsyncClient, test_event):
    response = await client.post(f"/api/events/{test_event.id}/register")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejected_user_cannot_register_again(
    client: AsyncClient, test_event, organizer_headers, attendee_headers
):
    registration_id = (await _register(client, test_event.id, attendee_headers)).json()["registration"]["id"]
    await _set_status(client, test_event.id, registration_id, "rejected", organizer_headers)

    response = await _register(client, test_event.id, attendee_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_registrations_listed_in_order(client: AsyncClient, db_session, test_event, attendee_headers):
    second = await make_user(db_session, "Second Person", "second@example.com")
    event_id = test_event.id

    await _register(client, event_id, attendee_headers)
    await _register(client, event_id, headers_for(second.id))

    data = (await client.get(f"/api/events/{event_id}")).json()
    assert data["registrationCount"] == 2
    assert [r["user"]["name"] for r in data["registrations"]] == ["Uche Attendee", "Second Person"]


@pytest.mark.asyncio
async def test_only_organizer_manages_registrations(
    client: AsyncClient, test_event, attendee_headers, other_headers
):
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]

    response = await _set_status(client, event_id, registration_id, "approved", other_headers)
    assert response.status_code == 403
    assert response.json() == {"message": "Only the event organizer can manage registrations"}

    response = await _check_in(client, event_id, registration_id, attendee_headers)
    assert response.status_code == 403

    detail = (await client.get(f"/api/events/{event_id}")).json()
    assert detail["registrations"][0]["status"] == "pending"


@pytest.mark.asyncio
async def test_unknown_registration_is_404(client: AsyncClient, test_event, organizer_headers):
    response = await _set_status(client, test_event.id, 99999, "approved", organizer_headers)
    assert response.status_code == 404
    assert response.json() == {"message": "Registration not found"}


@pytest.mark.asyncio
async def test_invalid_status_value(client: AsyncClient, test_event, organizer_headers, attendee_headers):
    registration_id = (await _register(client, test_event.id, attendee_headers)).json()["registration"]["id"]
    response = await _set_status(client, test_event.id, registration_id, "maybe", organizer_headers)
    assert response.status_code == 400
    assert response.json()["message"].startswith("status")


@pytest.mark.asyncio
async def test_check_in_requires_approval(
    client: AsyncClient, test_event, organizer_headers, attendee_headers
):
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]

    response = await _check_in(client, event_id, registration_id, organizer_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Only approved registrations can be checked in"}

    await _set_status(client, event_id, registration_id, "rejected", organizer_headers)
    response = await _check_in(client, event_id, registration_id, organizer_headers)
    assert response.status_code == 400

    detail = (await client.get(f"/api/events/{event_id}")).json()
    assert detail["registrations"][0]["checkedIn"] is False


@pytest.mark.asyncio
async def test_check_in_twice_is_a_no_op(
    client: AsyncClient, test_event, organizer_headers, attendee_headers
):
    """An approved registration stays checked in; repeating the call still succeeds."""
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]
    await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    await _check_in(client, event_id, registration_id, organizer_headers)

    response = await _check_in(client, event_id, registration_id, organizer_headers)
    assert response.status_code == 200
    registration = response.json()["registration"]
    assert registration["status"] == "approved"
    assert registration["checkedIn"] is True

    detail = (await client.get(f"/api/events/{event_id}")).json()
    assert detail["registrations"][0]["checkedIn"] is True


@pytest.mark.asyncio
async def test_status_transitions(client: AsyncClient, test_event, organizer_headers, attendee_headers):
    """approved may still be rejected; rejected is final; nothing returns to pending."""
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]

    response = await _set_status(client, event_id, registration_id, "pending", organizer_headers)
    assert response.status_code == 400

    assert (await _set_status(client, event_id, registration_id, "approved", organizer_headers)).status_code == 200

    response = await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Registration is already approved"}

    assert (await _set_status(client, event_id, registration_id, "rejected", organizer_headers)).status_code == 200

    response = await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Cannot change registration from rejected to approved"}


@pytest.mark.asyncio
async def test_checked_in_registration_is_final(
    client: AsyncClient, test_event, organizer_headers, attendee_headers
):
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]
    await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    await _check_in(client, event_id, registration_id, organizer_headers)

    response = await _set_status(client, event_id, registration_id, "rejected", organizer_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Registration is already checked in"}


@pytest.mark.asyncio
async def test_status_change_survives_notification_failure(
    client: AsyncClient, test_event, organizer_headers, attendee_headers, monkeypatch
):
    """A failed notification write leaves the committed status change in place."""
    event_id = test_event.id
    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]

    def broken_notification(**kwargs):
        raise OperationalError("INSERT INTO notifications", {}, Exception("disk I/O error"))

    monkeypatch.setattr(notification_service, "Notification", broken_notification)

    response = await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    assert response.status_code == 200
    assert response.json()["registration"]["status"] == "approved"

    monkeypatch.undo()

    detail = (await client.get(f"/api/events/{event_id}")).json()
    assert detail["registrations"][0]["status"] == "approved"
    notifications = (await client.get("/api/notifications/my", headers=attendee_headers)).json()
    assert notifications == []


@pytest.mark.asyncio
async def test_registration_writes_commit_before_cache_invalidation(
    client: AsyncClient, db_session, test_event, organizer_headers, attendee_headers, monkeypatch
):
    event_id = test_event.id
    calls = track_commits_and_invalidation(db_session, monkeypatch)

    registration_id = (await _register(client, event_id, attendee_headers)).json()["registration"]["id"]
    assert calls == ["commit", "invalidate"]

    calls.clear()
    await _set_status(client, event_id, registration_id, "approved", organizer_headers)
    assert calls[-1] == "invalidate"
    assert "commit" in calls[:-1]

    calls.clear()
    response = await _check_in(client, event_id, registration_id, organizer_headers)
    assert response.status_code == 200
    assert calls == ["commit", "invalidate"]
