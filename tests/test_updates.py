"""Tests for organization and quest progress posts."""
import pytest
from httpx import AsyncClient

API = "/api/v1"


@pytest.fixture
async def organization(authed_client: AsyncClient) -> dict:
    region = (await authed_client.post(f"{API}/regions", json={"name": "Perm Krai"})).json()
    city = (
        await authed_client.post(f"{API}/cities", json={"name": "Perm", "regionId": region["id"]})
    ).json()
    org_type = (await authed_client.post(f"{API}/organization-types", json={"name": "Fund"})).json()
    response = await authed_client.post(
        f"{API}/organizations",
        json={"name": "Warm Home", "cityId": city["id"], "organizationTypeId": org_type["id"]},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_organization_update_lifecycle(
    authed_client: AsyncClient, client: AsyncClient, organization, other_auth
):
    body = {"organizationId": organization["id"], "title": "We moved", "text": "New address"}

    response = await client.post(f"{API}/organization-updates", json=body, headers=other_auth.headers)
    assert response.status_code == 403

    response = await authed_client.post(f"{API}/organization-updates", json=body)
    assert response.status_code == 201
    post = response.json()
    assert post["photos"] == []

    listed = (
        await client.get(
            f"{API}/organization-updates", params={"organizationId": organization["id"]}
        )
    ).json()
    assert [p["id"] for p in listed] == [post["id"]]

    response = await authed_client.patch(
        f"{API}/organization-updates/{post['id']}", json={"text": "Corrected address"}
    )
    assert response.status_code == 200
    assert response.json()["text"] == "Corrected address"

    response = await authed_client.delete(f"{API}/organization-updates/{post['id']}")
    assert response.status_code == 200
    response = await client.get(f"{API}/organization-updates/{post['id']}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_organization_update_photo_limit(authed_client: AsyncClient, organization):
    response = await authed_client.post(
        f"{API}/organization-updates",
        json={
            "organizationId": organization["id"],
            "title": "Gallery",
            "text": "Too many photos",
            "photos": [f"p{i}.png" for i in range(6)],
        },
    )
    assert response.status_code == 400
    assert response.json()["issues"][0]["path"] == "photos"


@pytest.mark.asyncio
async def test_quest_update_requires_quest_owner(
    authed_client: AsyncClient, client: AsyncClient, organization, other_auth
):
    quest = (
        await authed_client.post(
            f"{API}/quests", json={"title": "Collect food", "cityId": organization["cityId"]}
        )
    ).json()
    body = {"questId": quest["id"], "title": "Day one", "text": "20 boxes collected"}

    response = await client.post(f"{API}/quest-updates", json=body, headers=other_auth.headers)
    assert response.status_code == 403

    response = await authed_client.post(f"{API}/quest-updates", json=body)
    assert response.status_code == 201
    post = response.json()

    listed = (await client.get(f"{API}/quest-updates", params={"questId": quest["id"]})).json()
    assert [p["title"] for p in listed] == ["Day one"]

    response = await client.patch(
        f"{API}/quest-updates/{post['id']}", json={"title": "Edited"}, headers=other_auth.headers
    )
    assert response.status_code == 403
