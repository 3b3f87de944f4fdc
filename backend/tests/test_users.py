"""
Tests for profile endpoints.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_get_my_profile(client: AsyncClient, organizer, organizer_headers):
    response = await client.get("/api/users/me", headers=organizer_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["id"] == organizer.id
    assert data["name"] == "Olivia Organizer"
    assert data["preferredCategories"] == []


@pytest.mark.asyncio
async def test_update_profile_partial(client: AsyncClient, organizer_headers):
    """Only the supplied fields change; comma lists are split into tags."""
    response = await client.put(
        "/api/users/me",
        json={
            "headline": "Community builder",
            "skills": "Python, Public speaking, python",
            "experience": [{"title": "Organizer", "company": "PyLocal"}],
        },
        headers=organizer_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["headline"] == "Community builder"
    assert data["skills"] == ["Python", "Public speaking"]
    assert data["experience"] == [{"title": "Organizer", "company": "PyLocal"}]
    assert data["name"] == "Olivia Organizer"


@pytest.mark.asyncio
async def test_update_profile_clears_list(client: AsyncClient, organizer_headers):
    await client.put("/api/users/me", json={"skills": ["Go"]}, headers=organizer_headers)
    response = await client.put("/api/users/me", json={"skills": None}, headers=organizer_headers)
    assert response.status_code == 200
    assert response.json()["skills"] == []


@pytest.mark.asyncio
async def test_get_profile_by_id(client: AsyncClient, attendee, organizer_headers):
    response = await client.get(f"/api/users/{attendee.id}", headers=organizer_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "uche@example.com"


@pytest.mark.asyncio
async def test_get_profile_not_found(client: AsyncClient, organizer_headers):
    response = await client.get("/api/users/99999", headers=organizer_headers)
    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


@pytest.mark.asyncio
async def test_list_users(client: AsyncClient, organizer, attendee, organizer_headers):
    response = await client.get("/api/users", headers=organizer_headers)
    assert response.status_code == 200
    names = [u["name"] for u in response.json()]
    assert names == ["Olivia Organizer", "Uche Attendee"]
