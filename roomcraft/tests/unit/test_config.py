"""Unit tests for configuration validation."""

import pytest
from pydantic import ValidationError
from roomcraft.app.core.config import Settings


class TestSettingsValidation:
    """Test cases for Settings validation."""

    def test_default_settings(self):
        """Test that default settings are valid."""
        settings = Settings()

        assert settings.log_level == "INFO"
        assert settings.canvas_width == 800
        assert settings.canvas_height == 600
        assert settings.autosave_debounce_ms == 2000
        assert settings.theme_duration_hours == 24

    def test_log_level_validation_case_insensitive(self):
        """Test log level is case-insensitive."""
        settings = Settings(log_level="info")
        assert settings.log_level == "INFO"

        settings = Settings(log_level="DeBuG")
        assert settings.log_level == "DEBUG"

    def test_log_level_validation_invalid(self):
        """Test log level rejects invalid values."""
        with pytest.raises(ValidationError, match="log_level must be one of"):
            Settings(log_level="INVALID")

    def test_canvas_size_positive(self):
        """Test canvas dimensions must be positive."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(canvas_width=0)

        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(canvas_height=-600)

    def test_theme_duration_positive(self):
        """Test theme duration must be positive."""
        with pytest.raises(ValidationError, match="Value must be positive"):
            Settings(theme_duration_hours=0)

    def test_debounce_may_be_zero(self):
        """Test a zero debounce is allowed but a negative one is not."""
        assert Settings(autosave_debounce_ms=0).autosave_debounce_ms == 0

        with pytest.raises(ValidationError, match="Delay must not be negative"):
            Settings(autosave_debounce_ms=-1)

    def test_listing_limits_capped(self):
        """Test listing defaults cannot exceed 100."""
        with pytest.raises(ValidationError, match="leaderboard_default_limit should not exceed 100"):
            Settings(leaderboard_default_limit=101)

        with pytest.raises(ValidationError, match="submissions_page_size should not exceed 100"):
            Settings(submissions_page_size=500)

    def test_cors_origins_list(self):
        """Test CORS origins are split and trimmed."""
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
