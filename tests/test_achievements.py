"""Tests for achievements and awarding them to users."""
import pytest
from httpx import AsyncClient

API = "/api/v1"


@pytest.mark.asyncio
async def test_achievement_crud(authed_client: AsyncClient, client: AsyncClient):
    response = await authed_client.post(
        f"{API}/achievements",
        json={"title": "First Steps", "description": "Join a quest", "rarity": "common"},
    )
    assert response.status_code == 201
    achievement = response.json()
    assert achievement["rarity"] == "common"

    response = await authed_client.patch(
        f"{API}/achievements/{achievement['id']}", json={"rarity": "legendary"}
    )
    assert response.status_code == 200
    assert response.json()["rarity"] == "legendary"

    listed = (await client.get(f"{API}/achievements")).json()
    assert [a["id"] for a in listed] == [achievement["id"]]

    response = await authed_client.delete(f"{API}/achievements/{achievement['id']}")
    assert response.status_code == 200
    response = await client.get(f"{API}/achievements/{achievement['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invalid_rarity(authed_client: AsyncClient):
    response = await authed_client.post(
        f"{API}/achievements", json={"title": "Shiny", "rarity": "mythic"}
    )
    assert response.status_code == 400
    assert response.json()["issues"][0]["path"] == "rarity"


@pytest.mark.asyncio
async def test_duplicate_title_conflicts(authed_client: AsyncClient):
    body = {"title": "Helper", "rarity": "epic"}
    assert (await authed_client.post(f"{API}/achievements", json=body)).status_code == 201
    assert (await authed_client.post(f"{API}/achievements", json=body)).status_code == 409


@pytest.mark.asyncio
async def test_achievement_may_precede_its_quest(authed_client: AsyncClient):
    response = await authed_client.post(
        f"{API}/achievements", json={"title": "Quester", "rarity": "rare", "questId": 77}
    )
    assert response.status_code == 201
    assert response.json()["questId"] == 77

    response = await authed_client.patch(
        f"{API}/achievements/{response.json()['id']}", json={"questId": 78}
    )
    assert response.status_code == 200
    assert response.json()["questId"] == 78


@pytest.mark.asyncio
async def test_assign_once(authed_client: AsyncClient, client: AsyncClient, other_user):
    achievement = (
        await authed_client.post(f"{API}/achievements", json={"title": "Donor", "rarity": "epic"})
    ).json()
    url = f"{API}/achievements/{achievement['id']}/assign/{other_user.id}"

    response = await authed_client.post(url)
    assert response.status_code == 201
    assert response.json()["achievement"]["title"] == "Donor"

    response = await authed_client.post(url)
    assert response.status_code == 409
    assert response.json()["detail"] == "User has already received this achievement"

    awards = (await client.get(f"{API}/achievements/user/{other_user.id}")).json()
    assert len(awards) == 1


@pytest.mark.asyncio
async def test_assign_to_missing_user(authed_client: AsyncClient):
    achievement = (
        await authed_client.post(f"{API}/achievements", json={"title": "Ghost", "rarity": "private"})
    ).json()
    response = await authed_client.post(f"{API}/achievements/{achievement['id']}/assign/404")
    assert response.status_code == 404
