"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from contentbase.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None, environment="development")
    assert settings.api_prefix == "/api"
    assert settings.max_identifier_length == 63
    assert settings.default_page_size <= settings.max_page_size
    assert settings.is_development is True


def test_environment_variables(monkeypatch):
    monkeypatch.setenv("CONTENTBASE_MAX_IDENTIFIER_LENGTH", "40")
    monkeypatch.setenv("CONTENTBASE_ENVIRONMENT", "production")
    settings = Settings(_env_file=None)
    assert settings.max_identifier_length == 40
    assert settings.is_production is True


def test_cors_origins_from_comma_separated_string():
    settings = Settings(_env_file=None, cors_origins="http://a.test, http://b.test")
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_is_sqlite():
    assert Settings(_env_file=None, database_url="sqlite+aiosqlite:///:memory:").is_sqlite
    assert not Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@localhost/cb"
    ).is_sqlite


def test_sqlite_rejects_multiple_workers():
    with pytest.raises(ValidationError, match="SQLite does not support multiple worker"):
        Settings(_env_file=None, database_url="sqlite+aiosqlite:///./x.db", workers=4)


def test_postgres_allows_multiple_workers():
    settings = Settings(
        _env_file=None, database_url="postgresql+asyncpg://u:p@localhost/cb", workers=4
    )
    assert settings.workers == 4


def test_page_sizes_validated():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, default_page_size=100, max_page_size=10)


def test_identifier_length_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_identifier_length=0)
