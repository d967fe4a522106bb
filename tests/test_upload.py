"""Tests for the generic image upload endpoints."""
import pytest
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient

from volunteer_api.main import app
from volunteer_api.services import storage_service

API = "/api/v1"


class _Body:
    def __init__(self, data: bytes):
        self._data = data

    def read(self) -> bytes:
        return self._data


class FakeS3:
    def __init__(self, fail_on: int | None = None):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.deleted: list[str] = []
        self.fail_on = fail_on
        self.puts = 0

    def put_object(self, Bucket, Key, Body, ContentType=None):  # noqa: N803
        self.puts += 1
        if self.fail_on is not None and self.puts == self.fail_on:
            raise ClientError({"Error": {"Code": "InternalError"}}, "PutObject")
        self.objects[Key] = (Body, ContentType)

    def delete_object(self, Bucket, Key):  # noqa: N803
        self.deleted.append(Key)
        self.objects.pop(Key, None)

    def get_object(self, Bucket, Key):  # noqa: N803
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey"}}, "GetObject")
        body, content_type = self.objects[Key]
        return {"Body": _Body(body), "ContentType": content_type}


@pytest.fixture
def fake_s3(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(storage_service, "get_s3_client", lambda: fake)
    return fake


@pytest.mark.asyncio
async def test_upload_and_fetch_image(authed_client: AsyncClient, client: AsyncClient, fake_s3):
    response = await authed_client.post(
        f"{API}/upload/images",
        data={"folder": "avatars"},
        files=[("files", ("me.png", b"\x89PNG data", "image/png"))],
    )
    assert response.status_code == 201, response.text
    data = response.json()
    assert len(data["keys"]) == 1
    key = data["keys"][0]
    assert key.startswith("avatars/") and key.endswith(".png")
    assert data["urls"][0].endswith(f"/{key}")

    response = await client.get(f"{API}/upload/{key}")
    assert response.status_code == 200
    assert response.content == b"\x89PNG data"
    assert response.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_upload_requires_auth(client: AsyncClient, fake_s3):
    response = await client.post(
        f"{API}/upload/images", files=[("files", ("me.png", b"x", "image/png"))]
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upload_rejects_too_many_files(authed_client: AsyncClient, fake_s3):
    files = [("files", (f"{i}.png", b"x", "image/png")) for i in range(11)]
    response = await authed_client.post(f"{API}/upload/images", files=files)
    assert response.status_code == 400
    assert fake_s3.objects == {}


@pytest.mark.asyncio
async def test_upload_failure_cleans_up_earlier_files(authed_client: AsyncClient, test_auth, monkeypatch):
    fake = FakeS3(fail_on=2)
    monkeypatch.setattr(storage_service, "get_s3_client", lambda: fake)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        response = await c.post(
            f"{API}/upload/images",
            files=[
                ("files", ("a.png", b"a", "image/png")),
                ("files", ("b.png", b"b", "image/png")),
            ],
            headers=test_auth.headers,
        )
    assert response.status_code == 500
    assert len(fake.deleted) == 1
    assert fake.objects == {}


@pytest.mark.asyncio
async def test_fetch_missing_object(client: AsyncClient, fake_s3):
    response = await client.get(f"{API}/upload/images/missing.png")
    assert response.status_code == 404
