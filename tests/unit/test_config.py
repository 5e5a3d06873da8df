"""Tests for configuration loading."""

import pytest

from src.core.config import Settings


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Run each test from an empty directory so no .env file leaks in."""
    monkeypatch.chdir(tmp_path)
    for name in ("DATABASE_PATH", "HOST", "PORT", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "ENVIRONMENT", "LOGFIRE_TOKEN"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Test settings fall back to development defaults."""
    settings = Settings()

    assert settings.database_path == "data/tasks.db"
    assert settings.port == 3000
    assert settings.cors_allow_origins == ["*"]
    assert settings.logfire_token is None
    assert settings.environment == "development"


def test_environment_overrides(monkeypatch) -> None:
    """Test settings are read from environment variables case-insensitively."""
    monkeypatch.setenv("DATABASE_PATH", ":memory:")
    monkeypatch.setenv("port", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", '["http://localhost:5500"]')
    monkeypatch.setenv("ENVIRONMENT", "Production")

    settings = Settings()

    assert settings.database_path == ":memory:"
    assert settings.port == 8080
    assert settings.cors_allow_origins == ["http://localhost:5500"]
    assert settings.environment == "Production"


def test_env_file_is_read(tmp_path) -> None:
    """Test values in a .env file in the working directory are picked up."""
    (tmp_path / ".env").write_text("DATABASE_PATH=/var/lib/tasklist/tasks.db\nUNRELATED=ignored\n")

    settings = Settings()

    assert settings.database_path == "/var/lib/tasklist/tasks.db"
