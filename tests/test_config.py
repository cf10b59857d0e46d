import pytest

from box_office.config import Settings, _to_async_dsn


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("postgresql://u:p@db:5432/box", "postgresql+asyncpg://u:p@db:5432/box"),
        ("postgres://u:p@db:5432/box", "postgresql+asyncpg://u:p@db:5432/box"),
        ("postgresql+asyncpg://u:p@db/box", "postgresql+asyncpg://u:p@db/box"),
        ("postgresql://u:p@db/box?sslmode=require", "postgresql+asyncpg://u:p@db/box"),
    ],
)
def test_to_async_dsn(raw, expected):
    assert _to_async_dsn(raw) == expected


def test_postgres_connection_string_overrides_database_url(monkeypatch):
    monkeypatch.setenv("POSTGRES_CONNECTION_STRING", "postgres://u:p@db:5432/box")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/box"


def test_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9000")
    assert Settings().port == 9000


def test_database_url_switched_to_async_driver(monkeypatch):
    monkeypatch.delenv("POSTGRES_CONNECTION_STRING", raising=False)
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/box")
    assert Settings().database_url == "postgresql+asyncpg://u:p@db:5432/box"


def test_sqlite_url_left_alone(monkeypatch):
    monkeypatch.delenv("POSTGRES_CONNECTION_STRING", raising=False)
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///box.db")
    assert Settings().database_url == "sqlite+aiosqlite:///box.db"


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert Settings().cors_origins == ["http://localhost:3000"]


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert Settings().cors_origins == ["http://a.test", "http://b.test"]
