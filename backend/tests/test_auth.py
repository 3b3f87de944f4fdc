"""
Tests for authentication endpoints: registration, login and bearer tokens.
"""

import pytest
from datetime import timedelta
from httpx import AsyncClient

from softouch.core.security import create_access_token


@pytest.mark.asyncio
async def test_register_user(client: AsyncClient):
    """Successful registration returns the new profile."""
    response = await client.post("/api/auth/register", json={
        "name": "Ada Lovelace",
        "email": "Ada@Example.com",
        "password": "securepassword123",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "ada@example.com"
    assert data["name"] == "Ada Lovelace"
    assert data["skills"] == []
    assert "hashedPassword" not in data  # Never expose password hash
    assert "password" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, organizer):
    """Duplicate email, in any case, is rejected with a message."""
    response = await client.post("/api/auth/register", json={
        "name": "Someone Else",
        "email": "OLIVIA@example.com",
        "password": "securepassword123",
    })
    assert response.status_code == 400
    assert response.json() == {"message": "User already exists"}


@pytest.mark.asyncio
async def test_register_weak_password(client: AsyncClient):
    """Password under 8 chars fails validation."""
    response = await client.post("/api/auth/register", json={
        "name": "Weak",
        "email": "weak@example.com",
        "password": "short",
    })
    assert response.status_code == 400
    data = response.json()
    assert data["message"].startswith("password")
    assert data["errors"]


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, organizer):
    """Valid credentials return a JWT usable on protected routes."""
    response = await client.post("/api/auth/login", json={
        "email": "olivia@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "bearer"

    me = await client.get(
        "/api/users/me", headers={"Authorization": f"Bearer {data['accessToken']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "olivia@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, organizer):
    response = await client.post("/api/auth/login", json={
        "email": "olivia@example.com",
        "password": "wrongpassword",
    })
    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password"}


@pytest.mark.asyncio
async def test_login_nonexistent_email(client: AsyncClient):
    response = await client.post("/api/auth/login", json={
        "email": "nobody@example.com",
        "password": "anypassword123",
    })
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_missing_token_is_401(client: AsyncClient):
    response = await client.get("/api/users/me")
    assert response.status_code == 401
    assert response.json() == {"message": "No token, authorization denied"}
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_garbage_token_is_401(client: AsyncClient):
    response = await client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json() == {"message": "Could not validate credentials"}


@pytest.mark.asyncio
async def test_expired_token_is_401(client: AsyncClient, organizer):
    token = create_access_token(data={"sub": str(organizer.id)}, expires_delta=timedelta(minutes=-1))
    response = await client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
