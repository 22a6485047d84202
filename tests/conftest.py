"""Shared test fixtures."""

import os

# Configure before the app is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-unit-tests-only"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_SECRET"] = "test-admin-secret"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskboard.database import Base, get_db
from taskboard.main import app

ADMIN_SECRET = os.environ["ADMIN_SECRET"]


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client with the database dependency pointed at the test engine."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register an account; returns the response body plus ready-made headers."""

    async def _register(name: str, email: str, password: str = "secret123") -> dict:
        resp = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert resp.status_code == 201, resp.text
        data = resp.json()
        data["headers"] = auth_headers(data["token"])
        return data

    return _register


@pytest_asyncio.fixture
async def acme(register):
    """Tenant acme.com: an admin, a regular user and an outsider in the same tenant."""
    admin = await register("Alice Admin", "alice@acme.com")
    bob = await register("Bob Builder", "bob@acme.com")
    carol = await register("Carol Clerk", "carol@acme.com")
    return {"admin": admin, "bob": bob, "carol": carol}


@pytest.fixture
def create_board(client):
    async def _create(headers: dict, **body) -> dict:
        body.setdefault("name", "Sprint Board")
        resp = await client.post("/api/boards", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_task(client):
    async def _create(headers: dict, board_id: str, **body) -> dict:
        body.setdefault("title", "Write docs")
        body["board_id"] = board_id
        resp = await client.post("/api/tasks", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
