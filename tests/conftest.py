"""
Shared fixtures: an in-memory SQLite database per test and an ASGI client
wired to it.
"""

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.pool import StaticPool

from config.settings import config
from database.session import build_engine, build_session_factory, get_db_session, init_models
from main import create_app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setattr(config, "bcrypt_rounds", 4)


@pytest_asyncio.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await init_models(eng)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as s:
        yield s


@pytest.fixture
def app(session_factory):
    application = create_app()

    async def _test_session():
        async with session_factory() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                raise

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register(client, username="demo", password="password"):
    """Register a user and return ``(response_json, auth_headers)``."""
    resp = await client.post("/api/auth/register", json={"username": username, "password": password})
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body, {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def register_user(client):
    async def _register(username="demo", password="password"):
        return await register(client, username, password)

    return _register
