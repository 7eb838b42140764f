import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ["BCRYPT_ROUNDS"] = "4"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from splitboard.db.session import Base, get_db
from splitboard.main import app


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session_factory(db_engine):
    factory = sessionmaker(bind=db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield factory
    app.dependency_overrides.clear()


@pytest.fixture
async def make_client(session_factory):
    """Each client keeps its own cookie jar, i.e. its own logged-in user."""
    clients = []

    def _make():
        client = httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def register(make_client):
    async def _register(nickname, email=None, password="correct-horse"):
        client = make_client()
        res = await client.post(
            "/api/v1/users/register",
            json={
                "email": email or f"{nickname.lower()}@example.com",
                "password": password,
                "nickname": nickname,
            },
        )
        assert res.status_code == 200, res.text
        return client, res.json()["user"]

    return _register


@pytest.fixture
def make_group(register):
    """Creator plus members joined through the invite code, in join order."""

    async def _make_group(*nicknames, name="Trip"):
        users = [await register(n) for n in nicknames]
        owner_client, _ = users[0]

        res = await owner_client.post("/api/v1/groups/", json={"name": name})
        assert res.status_code == 200, res.text
        group = res.json()

        for client, _ in users[1:]:
            res = await client.post("/api/v1/groups/join", json={"invite_code": group["invite_code"]})
            assert res.status_code == 200, res.text

        return group, users

    return _make_group
