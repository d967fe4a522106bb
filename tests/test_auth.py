"""Tests for registration, login and bearer authentication."""
import pytest
from httpx import AsyncClient

API = "/api/v1"
TEST_PASSWORD = "secret123"


def _register_body(**overrides):
    body = {
        "firstName": "Maria",
        "lastName": "Ivanova",
        "email": "Maria@Example.com",
        "password": "hunter22",
        "confirmPassword": "hunter22",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_register_returns_user_without_password(client: AsyncClient):
    response = await client.post(f"{API}/auth/register", json=_register_body())
    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "maria@example.com"
    assert data["level"] == 1
    assert data["experience"] == 0
    assert data["recordStatus"] == "CREATED"
    assert "password" not in data
    assert "passwordHash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client: AsyncClient):
    await client.post(f"{API}/auth/register", json=_register_body())
    response = await client.post(f"{API}/auth/register", json=_register_body())
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_reports_every_issue(client: AsyncClient):
    response = await client.post(
        f"{API}/auth/register",
        json={"firstName": "", "email": "not-an-email", "password": "x"},
    )
    assert response.status_code == 400
    paths = {issue["path"] for issue in response.json()["issues"]}
    assert {"firstName", "lastName", "email", "password", "confirmPassword"} <= paths


@pytest.mark.asyncio
async def test_register_password_mismatch(client: AsyncClient):
    response = await client.post(
        f"{API}/auth/register", json=_register_body(confirmPassword="different1")
    )
    assert response.status_code == 400
    assert any("Passwords do not match" in i["message"] for i in response.json()["issues"])


@pytest.mark.asyncio
async def test_login_and_me(client: AsyncClient, test_user):
    response = await client.post(
        f"{API}/auth/login", json={"email": test_user.email, "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["tokenType"] == "bearer"
    assert data["user"]["id"] == test_user.id

    me = await client.get(
        f"{API}/auth/me", headers={"Authorization": f"Bearer {data['accessToken']}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == test_user.email


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, test_user):
    response = await client.post(
        f"{API}/auth/login", json={"email": test_user.email, "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


@pytest.mark.asyncio
async def test_protected_endpoint_requires_token(client: AsyncClient):
    response = await client.get(f"{API}/auth/me")
    assert response.status_code == 401

    response = await client.get(
        f"{API}/auth/me", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_deleted_user_token_rejected(authed_client: AsyncClient, test_user):
    response = await authed_client.delete(f"{API}/users/{test_user.id}")
    assert response.status_code == 200

    response = await authed_client.get(f"{API}/auth/me")
    assert response.status_code == 401
