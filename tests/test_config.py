"""Unit tests for configuration."""

import pytest
from pydantic import ValidationError

from workflow_sync.client import ClientSettings
from workflow_sync.config import Settings


def test_cors_origins_are_split_and_trimmed():
    config = Settings(CORS_ORIGINS=" http://a.test , ,http://b.test ")
    assert config.parsed_cors_origins() == ["http://a.test", "http://b.test"]


def test_database_url_must_be_supported():
    with pytest.raises(ValidationError):
        Settings(DATABASE_URL="mysql://root@localhost/workflows")

    assert Settings(DATABASE_URL="sqlite://").is_sqlite
    assert not Settings(DATABASE_URL="postgresql+psycopg2://u:p@db/w").is_sqlite


def test_blank_jwt_claims_are_disabled():
    config = Settings(JWT_AUDIENCE="  ", JWT_ISSUER="")
    assert config.jwt_audience is None
    assert config.jwt_issuer is None


def test_client_settings_defaults(monkeypatch):
    monkeypatch.delenv("API_URL", raising=False)
    monkeypatch.delenv("API_TIMEOUT_SECONDS", raising=False)
    config = ClientSettings(_env_file=None)
    assert config.base_url == "http://localhost:5000"
    assert config.timeout_seconds == 30.0


def test_client_settings_strip_trailing_slash():
    assert ClientSettings(API_URL="https://api.example.com/").base_url == "https://api.example.com"
