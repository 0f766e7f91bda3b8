import os

import pytest
from httpx import ASGITransport, AsyncClient

from auth.application.services import register_user
from auth.infrastructure.user_repository import DbUserRepository
from documents.infrastructure.document_repository import DbDocumentRepository
from main import app
from shared.config import settings
from shared.infrastructure.database import Database

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(settings, "BCRYPT_ROUNDS", 4)


@pytest.fixture
async def database():
    database = Database(TEST_DATABASE_URL)
    await database.create_all()
    yield database
    await database.drop_all()
    await database.dispose()


@pytest.fixture
async def db(database):
    async with database.session() as session:
        yield session


@pytest.fixture
async def client(database):
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def create_user_and_get_headers(client: AsyncClient, username: str = "testuser") -> dict:
    """Register a user and return auth headers."""
    await client.post(
        "/api/auth/register",
        json={"username": username, "password": "secret123"},
    )
    resp = await client.post(
        "/api/auth/login",
        json={"username": username, "password": "secret123"},
    )
    token = resp.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client) -> dict:
    return await create_user_and_get_headers(client)


async def register(db, username: str):
    return await register_user(
        DbUserRepository(db),
        DbDocumentRepository(db),
        username=username,
        password="secret123",
    )


@pytest.fixture
async def user(db):
    return await register(db, "alice")


@pytest.fixture
async def other_user(db):
    return await register(db, "bob")


@pytest.fixture
def documents(db):
    return DbDocumentRepository(db)


@pytest.fixture
async def master(documents, user):
    return await documents.get_master(user.username)
