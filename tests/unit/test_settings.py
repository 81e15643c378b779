"""
Unit tests for application settings.

Tests environment variable loading and validation bounds.
"""

import pytest
from pydantic import ValidationError

from authcore.config.settings import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Settings have sane defaults without environment."""
        monkeypatch.delenv("AUTHCORE_BCRYPT_COST", raising=False)
        monkeypatch.delenv("AUTHCORE_LOG_LEVEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.bcrypt_cost == 10
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """AUTHCORE_ environment variables override defaults."""
        monkeypatch.setenv("AUTHCORE_BCRYPT_COST", "12")
        monkeypatch.setenv("authcore_log_level", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.bcrypt_cost == 12
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("cost", ["3", "32"])
    def test_bcrypt_cost_bounds(self, monkeypatch: pytest.MonkeyPatch, cost: str) -> None:
        """bcrypt accepts cost factors 4 through 31 only."""
        monkeypatch.setenv("AUTHCORE_BCRYPT_COST", cost)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self) -> None:
        """get_settings() returns the same instance."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
