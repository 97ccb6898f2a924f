"""Unit tests for application settings."""

import pytest

from gatehouse.config import AuthSettings, DatabaseSettings, Settings
from gatehouse.util.error import ConfigError


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Defaults match the documented configuration."""
        settings = Settings(auth=AuthSettings(jwt_secret="s"))

        assert settings.auth.jwt_expiry_seconds == 604800
        assert settings.auth.jwt_algorithm == "HS256"
        assert settings.auth.min_password_length == 8
        assert settings.auth.default_avatar_url == "/default-avatar.png"
        assert settings.oauth.timeout_seconds == 10.0
        assert settings.oauth.facebook.fields == "id,name,email,picture"

    def test_nested_environment_variables(self, monkeypatch):
        """Nested settings are read with the __ delimiter."""
        monkeypatch.setenv("AUTH__JWT_EXPIRY_SECONDS", "3600")
        monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://u:p@db/gatehouse")

        settings = Settings()

        assert settings.auth.jwt_expiry_seconds == 3600
        assert settings.database_url == "postgresql+asyncpg://u:p@db/gatehouse"

    def test_check_required_without_secret(self):
        """A missing signing secret fails fast."""
        settings = Settings(auth=AuthSettings(jwt_secret=None))

        with pytest.raises(ConfigError, match="AUTH__JWT_SECRET"):
            settings.check_required()

    def test_database_url_required_on_access(self):
        """The connection string is only demanded when persistence needs it."""
        settings = Settings(database=DatabaseSettings(url=None))

        with pytest.raises(ConfigError, match="DATABASE__URL"):
            _ = settings.database_url
