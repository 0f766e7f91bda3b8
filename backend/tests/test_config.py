from shared.config import Settings


def test_default_settings(monkeypatch):
    for name in ("DATABASE_URL", "LOG_LEVEL", "MASTER_DOCUMENT_NAME", "DEFAULT_SECTIONS"):
        monkeypatch.delenv(name, raising=False)

    s = Settings(_env_file=None)
    assert "postgresql+asyncpg" in s.DATABASE_URL
    assert s.JWT_ALGORITHM == "HS256"
    assert s.JWT_EXPIRATION_MINUTES == 60
    assert s.LOG_LEVEL == "INFO"
    assert s.MASTER_DOCUMENT_NAME == "Master"
    assert "Education" in s.DEFAULT_SECTIONS


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://test:test@db:5432/testdb")
    monkeypatch.setenv("JWT_SECRET", "supersecret")
    monkeypatch.setenv("LOG_FORMAT", "json")
    monkeypatch.setenv("DEFAULT_SECTIONS", '["Summary", "Education"]')
    monkeypatch.setenv("CREATE_SCHEMA_ON_STARTUP", "false")

    s = Settings(_env_file=None)
    assert s.DATABASE_URL == "postgresql+asyncpg://test:test@db:5432/testdb"
    assert s.JWT_SECRET == "supersecret"
    assert s.LOG_FORMAT == "json"
    assert s.DEFAULT_SECTIONS == ["Summary", "Education"]
    assert s.CREATE_SCHEMA_ON_STARTUP is False
