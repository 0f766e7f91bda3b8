import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from auth.domain.entities import User
from auth.domain.repository import UserRepository
from documents.application.services import create_master_document
from documents.domain.repository import DocumentRepository
from shared.config import settings
from shared.exceptions import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)


async def register_user(
    repo: UserRepository,
    documents: DocumentRepository,
    username: str,
    password: str,
) -> User:
    """Create an account along with its master document."""
    if await repo.get_by_username(username):
        raise ConflictError("Username already taken")

    user = await repo.create(User(username=username, password_hash=_hash_password(password)))
    await create_master_document(documents, owner=user.username)

    logger.info("Registered user %r", username)
    return user


async def authenticate_user(
    repo: UserRepository, username: str, password: str
) -> tuple[User, str]:
    user = await repo.get_by_username(username)
    if not user or not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
        logger.error("Failed sign-in for %r", username)
        raise AuthenticationError("Invalid username or password")

    token = _create_token(str(user.id))
    return user, token


async def verify_token(repo: UserRepository, token: str) -> User:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except jwt.PyJWTError:
        raise AuthenticationError("Invalid or expired token")

    try:
        user_id = UUID(payload["sub"])
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    user = await repo.get_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")
    return user


async def change_password(
    repo: UserRepository, username: str, old_password: str, new_password: str
) -> User:
    await authenticate_user(repo, username=username, password=old_password)
    return await repo.update_password(username, _hash_password(new_password))


def _hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode(), salt).decode()


def _create_token(user_id: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
