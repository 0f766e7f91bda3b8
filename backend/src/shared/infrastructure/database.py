import logging
from enum import StrEnum

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class StoreViolation(StrEnum):
    FOREIGN_KEY = "foreign_key"
    UNIQUE = "unique"
    CHECK = "check"
    OTHER = "other"


_SQLSTATE_VIOLATIONS = {
    "23503": StoreViolation.FOREIGN_KEY,
    "23505": StoreViolation.UNIQUE,
    "23514": StoreViolation.CHECK,
}


def classify_integrity_error(err: IntegrityError) -> StoreViolation:
    """Map a driver-level integrity error onto the closed set of violation kinds.

    PostgreSQL drivers expose a SQLSTATE; SQLite only reports the constraint
    type in its message.
    """
    orig = err.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code in _SQLSTATE_VIOLATIONS:
        return _SQLSTATE_VIOLATIONS[code]

    message = str(orig).upper()
    if "FOREIGN KEY" in message:
        return StoreViolation.FOREIGN_KEY
    if "UNIQUE" in message or "DUPLICATE KEY" in message:
        return StoreViolation.UNIQUE
    if "CHECK" in message:
        return StoreViolation.CHECK
    return StoreViolation.OTHER


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine and session factory for one database URL.

    Build one per process (the app lifespan does this) or per test, hand it to
    whatever needs sessions, and call ``dispose()`` when done.
    """

    def __init__(self, url: str, echo: bool = False):
        engine_kwargs = {}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in url:
                engine_kwargs["poolclass"] = StaticPool

        self.url = url
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def create_all(self) -> None:
        _import_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema created on %s", self.engine.dialect.name)

    async def drop_all(self) -> None:
        _import_models()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def _import_models() -> None:
    import auth.infrastructure.orm_models  # noqa: F401
    import content.infrastructure.models  # noqa: F401
    import documents.infrastructure.models  # noqa: F401
    import relationships.infrastructure.models  # noqa: F401
