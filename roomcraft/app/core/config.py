"""Application configuration."""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./roomcraft.db",
        description="Database connection URL backing the record store"
    )

    # CORS
    cors_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        description="Comma-separated list of allowed CORS origins"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # Canvas
    canvas_width: int = Field(default=800, description="Canvas width in pixels")
    canvas_height: int = Field(default=600, description="Canvas height in pixels")

    # Auto-save
    autosave_debounce_ms: int = Field(
        default=2000,
        description="Quiet period after the last edit before a design is written"
    )
    autosave_saved_reset_ms: int = Field(
        default=2000,
        description="Delay before a 'saved' status falls back to 'idle'"
    )
    autosave_error_reset_ms: int = Field(
        default=3000,
        description="Delay before an 'error' status falls back to 'idle'"
    )

    # Themes
    theme_duration_hours: int = Field(
        default=24,
        description="Lifetime of a rotated theme in hours"
    )

    # Listing
    leaderboard_default_limit: int = Field(
        default=10,
        description="Default number of designs returned by top-N queries"
    )
    submissions_page_size: int = Field(
        default=10,
        description="Default page size for submitted design listings"
    )

    # Development Settings
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator(
        "canvas_width",
        "canvas_height",
        "theme_duration_hours",
        "leaderboard_default_limit",
        "submissions_page_size",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate integer is positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("autosave_debounce_ms", "autosave_saved_reset_ms", "autosave_error_reset_ms")
    @classmethod
    def validate_non_negative_ms(cls, v: int) -> int:
        """Validate delays are not negative."""
        if v < 0:
            raise ValueError(f"Delay must not be negative, got {v}")
        return v

    @model_validator(mode="after")
    def validate_listing_limits(self) -> "Settings":
        """Validate listing defaults stay within a sane page size."""
        if self.leaderboard_default_limit > 100:
            raise ValueError("leaderboard_default_limit should not exceed 100")
        if self.submissions_page_size > 100:
            raise ValueError("submissions_page_size should not exceed 100")
        return self


# Global settings instance
settings = Settings()
