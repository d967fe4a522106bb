"""Tests for categories, help types and organization types."""
import pytest
from httpx import AsyncClient

API = "/api/v1"
API_V2 = "/api/v2"


@pytest.mark.asyncio
async def test_categories_require_auth_even_for_reads(client: AsyncClient):
    response = await client.get(f"{API}/categories")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_category_crud(authed_client: AsyncClient):
    response = await authed_client.post(f"{API}/categories", json={"name": "Ecology"})
    assert response.status_code == 201
    category_id = response.json()["id"]

    response = await authed_client.patch(
        f"{API}/categories/{category_id}", json={"name": "Environment"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Environment"

    response = await authed_client.delete(f"{API}/categories/{category_id}")
    assert response.status_code == 200
    response = await authed_client.get(f"{API}/categories/{category_id}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_bulk_categories(authed_client: AsyncClient):
    response = await authed_client.post(
        f"{API_V2}/categories", json=[{"name": "Animals"}, {"name": "Children"}]
    )
    assert response.status_code == 201
    assert [c["name"] for c in response.json()] == ["Animals", "Children"]


@pytest.mark.asyncio
async def test_bulk_categories_duplicate_in_request(authed_client: AsyncClient):
    response = await authed_client.post(
        f"{API_V2}/categories", json=[{"name": "Elderly"}, {"name": "Elderly"}]
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Category duplicate in request: Elderly"
    assert (await authed_client.get(f"{API}/categories")).json() == []


@pytest.mark.asyncio
async def test_bulk_categories_existing_name_rejects_whole_batch(authed_client: AsyncClient):
    await authed_client.post(f"{API}/categories", json={"name": "Sport"})
    response = await authed_client.post(
        f"{API_V2}/categories", json=[{"name": "Culture"}, {"name": "Sport"}]
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Category already exists: Sport"
    names = [c["name"] for c in (await authed_client.get(f"{API}/categories")).json()]
    assert names == ["Sport"]


@pytest.mark.asyncio
async def test_help_types_public_reads(authed_client: AsyncClient, client: AsyncClient):
    response = await authed_client.post(f"{API}/help-types", json={"name": "Money"})
    assert response.status_code == 201
    help_type_id = response.json()["id"]

    response = await client.get(f"{API}/help-types/{help_type_id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Money"

    response = await client.post(f"{API}/help-types", json={"name": "Goods"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_organization_type_names_unique(authed_client: AsyncClient):
    response = await authed_client.post(f"{API}/organization-types", json={"name": "Fund"})
    assert response.status_code == 201
    response = await authed_client.post(f"{API}/organization-types", json={"name": "Fund"})
    assert response.status_code == 409
