import jwt
import pytest

from auth.application.services import (
    authenticate_user,
    change_password,
    register_user,
    verify_token,
)
from auth.infrastructure.user_repository import DbUserRepository
from documents.infrastructure.document_repository import DbDocumentRepository
from shared.config import settings
from shared.exceptions import AuthenticationError, ConflictError


@pytest.fixture
def repo(db):
    return DbUserRepository(db)


@pytest.fixture
def documents(db):
    return DbDocumentRepository(db)


async def test_register_user(repo, documents):
    user = await register_user(repo, documents, username="alice", password="secret123")
    assert user.id is not None
    assert user.username == "alice"
    assert user.password_hash != "secret123"


async def test_register_creates_master_document(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")

    docs = await documents.list_by_owner("alice")
    assert len(docs) == 1
    assert docs[0].name == settings.MASTER_DOCUMENT_NAME
    assert docs[0].is_master
    assert not docs[0].is_template


async def test_register_duplicate_username(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")
    with pytest.raises(ConflictError, match="Username already taken"):
        await register_user(repo, documents, username="alice", password="other123")


async def test_authenticate_user(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")
    user, token = await authenticate_user(repo, username="alice", password="secret123")
    assert user.username == "alice"

    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    assert payload["sub"] == str(user.id)
    assert "exp" in payload


async def test_authenticate_wrong_password(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        await authenticate_user(repo, username="alice", password="wrong")


async def test_authenticate_unknown_username(repo):
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        await authenticate_user(repo, username="nobody", password="secret123")


async def test_verify_valid_token(repo, documents):
    registered = await register_user(repo, documents, username="alice", password="secret123")
    _, token = await authenticate_user(repo, username="alice", password="secret123")

    user = await verify_token(repo, token)
    assert user.id == registered.id


async def test_verify_invalid_token(repo):
    with pytest.raises(AuthenticationError, match="Invalid or expired token"):
        await verify_token(repo, "garbage.token.here")


async def test_verify_token_with_bad_subject(repo):
    token = jwt.encode({"sub": "not-a-uuid"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    with pytest.raises(AuthenticationError, match="Invalid or expired token"):
        await verify_token(repo, token)


async def test_change_password(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")
    await change_password(repo, username="alice", old_password="secret123", new_password="newpass1")

    user, _ = await authenticate_user(repo, username="alice", password="newpass1")
    assert user.username == "alice"
    with pytest.raises(AuthenticationError):
        await authenticate_user(repo, username="alice", password="secret123")


async def test_change_password_requires_old_password(repo, documents):
    await register_user(repo, documents, username="alice", password="secret123")
    with pytest.raises(AuthenticationError):
        await change_password(repo, username="alice", old_password="wrong", new_password="newpass1")
