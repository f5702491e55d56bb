import os

# Settings are read at import time
os.environ.setdefault("DB_DSN", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["LOGIN_RATE_LIMIT"] = "1000/minute"
os.environ["RATE_LIMIT_DEFAULT"] = "10000/minute"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from hostel_ops.infrastructure import get_session
from hostel_ops.main import create_app
from hostel_ops.models import Base
from hostel_ops.services import AuthService
from hostel_ops.state import AppState

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


def _enforce_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE rules unless asked, PostgreSQL always applies them
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(engine.sync_engine, "connect", _enforce_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
async def app(session_factory):
    app = create_app()

    async def _get_session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = _get_session

    async with session_factory() as s:
        await AuthService(s).ensure_default_users(ADMIN_USERNAME, ADMIN_PASSWORD)
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def login(client, username, password):
    resp = await client.post("/api/v1/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['accessToken']}"}


@pytest.fixture
async def admin_headers(client):
    return await login(client, ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
async def staff_member(client, admin_headers):
    resp = await client.post(
        "/api/v1/staff",
        json={"name": "Nok", "role": "Staff", "salary": 15000, "contact": "nok@example.com", "employeeId": "E01"},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.fixture
async def staff_headers(client, admin_headers, staff_member):
    resp = await client.post(
        "/api/v1/users",
        json={"username": "nok", "password": "secret1", "role": "Staff", "staffId": staff_member["id"]},
        headers=admin_headers,
    )
    assert resp.status_code == 201, resp.text
    return await login(client, "nok", "secret1")
