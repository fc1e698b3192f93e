"""Tests for settings validation."""

import pytest

from fitness.config import Settings


class TestValidateRequired:
    def test_ok_with_secret(self):
        Settings(JWT_SECRET="s").validate_required()

    def test_missing_secret(self):
        with pytest.raises(ValueError, match="JWT_SECRET"):
            Settings(JWT_SECRET=None).validate_required()

    def test_wildcard_cors_rejected_in_production(self):
        settings = Settings(JWT_SECRET="s", ENVIRONMENT="production", CORS_ORIGINS="*")

        with pytest.raises(ValueError, match="CORS_ORIGINS"):
            settings.validate_required()

    def test_cors_origins_split(self):
        settings = Settings(CORS_ORIGINS="https://a.example, https://b.example")

        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]
