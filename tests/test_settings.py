"""
Test Settings
"""

import pytest
from pydantic import ValidationError

from storefront.config.settings import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./data/storefront.db"
    assert settings.log_level == "INFO"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./tmp/other.db")
    monkeypatch.setenv("APP_DEBUG", "true")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///./tmp/other.db"
    assert settings.app_debug is True


def test_log_level_normalized():
    assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="chatty")
