"""Tests for user profiles and experience."""
import pytest
from httpx import AsyncClient

from volunteer_api.services.experience_service import calculate_level, required_experience

API = "/api/v1"


@pytest.mark.asyncio
async def test_users_are_public_without_password(client: AsyncClient, test_user):
    users = (await client.get(f"{API}/users")).json()
    assert [u["id"] for u in users] == [test_user.id]
    assert "passwordHash" not in users[0]

    response = await client.get(f"{API}/users/{test_user.id}")
    assert response.status_code == 200
    assert response.json()["firstName"] == "Ivan"


@pytest.mark.asyncio
async def test_update_own_profile(authed_client: AsyncClient, test_user):
    response = await authed_client.patch(
        f"{API}/users/{test_user.id}",
        json={"middleName": "Sergeevich", "avatarUrls": {"small": "https://img.test/s.png"}},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["middleName"] == "Sergeevich"
    assert data["avatarUrls"] == {"small": "https://img.test/s.png"}


@pytest.mark.asyncio
async def test_profile_ignores_protected_fields(authed_client: AsyncClient, test_user):
    response = await authed_client.patch(
        f"{API}/users/{test_user.id}", json={"level": 50, "experience": 99999}
    )
    assert response.status_code == 200
    assert response.json()["level"] == 1
    assert response.json()["experience"] == 0


@pytest.mark.asyncio
async def test_cannot_edit_or_delete_other_user(authed_client: AsyncClient, other_user):
    response = await authed_client.patch(f"{API}/users/{other_user.id}", json={"firstName": "X"})
    assert response.status_code == 403
    response = await authed_client.delete(f"{API}/users/{other_user.id}")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_add_experience_levels_up(authed_client: AsyncClient, other_user):
    response = await authed_client.patch(f"{API}/experience/{other_user.id}", json={"amount": 149})
    assert response.status_code == 200
    assert response.json() == {"level": 1, "experience": 149}

    response = await authed_client.patch(f"{API}/experience/{other_user.id}", json={"amount": 1})
    assert response.json() == {"level": 2, "experience": 150}

    response = await authed_client.patch(f"{API}/experience/{other_user.id}", json={"amount": 75})
    assert response.json() == {"level": 3, "experience": 225}


@pytest.mark.asyncio
async def test_add_experience_validation(authed_client: AsyncClient, test_user):
    response = await authed_client.patch(f"{API}/experience/{test_user.id}", json={"amount": 0})
    assert response.status_code == 400
    response = await authed_client.patch(f"{API}/experience/9999", json={"amount": 5})
    assert response.status_code == 404


def test_level_thresholds():
    assert required_experience(2) == 150
    assert required_experience(3) == 225
    assert calculate_level(0) == 1
    assert calculate_level(149) == 1
    assert calculate_level(150) == 2
    assert calculate_level(337) == 3
    assert calculate_level(338) == 4
