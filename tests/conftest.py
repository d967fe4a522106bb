"""
Test configuration and fixtures.

Provides:
- SQLite in-memory database, tables recreated for each test
- Users and bearer tokens for authenticated tests
- HTTPX AsyncClient bound to the ASGI app
- A fake redis with a controllable clock for cache tests
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["REDIS_URL"] = "memory://"
os.environ["RABBITMQ_URL"] = ""
os.environ["CHATTY_URL"] = ""
os.environ["CHATTY_API_KEY"] = ""
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from volunteer_api.core.deps import get_db
from volunteer_api.core.security import create_access_token, hash_password
from volunteer_api.db.base import Base
from volunteer_api.db.enums import UserRole
from volunteer_api.db.models import User
from volunteer_api.db.session import SessionLocal, engine
from volunteer_api.main import app
from volunteer_api.services import cache_service

API = "/api/v1"
API_V2 = "/api/v2"
TEST_PASSWORD = "secret123"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test; the app shares this session through get_db."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


def make_user(db: Session, email: str, *, role: UserRole = UserRole.USER, **fields) -> User:
    user = User(
        first_name=fields.pop("first_name", "Test"),
        last_name=fields.pop("last_name", "User"),
        email=email,
        password_hash=hash_password(TEST_PASSWORD),
        role=role.value,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_user(db: Session) -> User:
    return make_user(db, "volunteer@test.com", first_name="Ivan", last_name="Petrov")


@pytest.fixture(scope="function")
def other_user(db: Session) -> User:
    return make_user(db, "other@test.com", first_name="Anna", last_name="Smirnova")


@pytest.fixture(scope="function")
def admin_user(db: Session) -> User:
    return make_user(db, "admin@test.com", role=UserRole.ADMIN, first_name="Admin")


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def auth_for(user: User) -> TestAuth:
    return TestAuth(user=user, token=create_access_token(user.id, user.email))


@pytest.fixture(scope="function")
def test_auth(test_user: User) -> TestAuth:
    return auth_for(test_user)


@pytest.fixture(scope="function")
def other_auth(other_user: User) -> TestAuth:
    return auth_for(other_user)


@pytest.fixture(scope="function")
def admin_auth(admin_user: User) -> TestAuth:
    return auth_for(admin_user)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    test_auth: TestAuth
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient sending the test user's bearer token.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=test_auth.headers,
    ) as c:
        yield c

    app.dependency_overrides.clear()


# =============================================================================
# Cache Fixtures
# =============================================================================

class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRedis:
    """Just enough of redis.Redis for the read-through cache."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.store: dict[str, tuple[str, float | None]] = {}
        self.gets: list[str] = []

    def get(self, key: str):
        self.gets.append(key)
        entry = self.store.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self.clock() >= expires_at:
            del self.store[key]
            return None
        return value

    def set(self, key: str, value: str, ex: int | None = None):
        self.store[key] = (value, self.clock() + ex if ex else None)
        return True


@pytest.fixture(scope="function")
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def fake_redis(monkeypatch, fake_clock: FakeClock) -> FakeRedis:
    fake = FakeRedis(fake_clock)
    monkeypatch.setattr(cache_service, "get_sync_redis_client", lambda: fake)
    return fake
