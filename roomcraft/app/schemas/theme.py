"""Theme-related schemas."""

from pydantic import BaseModel, Field, model_validator


class Theme(BaseModel):
    """A time-boxed design challenge."""

    id: str = Field(..., min_length=1, description="Theme ID")
    name: str = Field(..., min_length=1, description="Theme name")
    description: str = Field(default="", description="Theme prompt")
    start_time: int = Field(..., description="Start time (epoch ms)")
    end_time: int = Field(..., description="End time (epoch ms)")
    active: bool = Field(default=False, description="Whether this is the live theme")

    @model_validator(mode="after")
    def validate_window(self) -> "Theme":
        """Validate the theme ends after it starts."""
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ThemeCreate(BaseModel):
    """Schema for activating a new theme."""

    name: str = Field(..., min_length=1, max_length=100, description="Theme name")
    description: str = Field(default="", max_length=500, description="Theme prompt")
    start_time: int | None = Field(default=None, description="Start time (epoch ms); defaults to now")
    end_time: int | None = Field(default=None, description="End time (epoch ms)")
    duration_hours: int | None = Field(
        default=None,
        gt=0,
        description="Lifetime in hours, used when end_time is omitted"
    )

    @model_validator(mode="after")
    def validate_window(self) -> "ThemeCreate":
        """Validate the time window is consistent."""
        if self.start_time is not None and self.end_time is not None:
            if self.end_time <= self.start_time:
                raise ValueError("end_time must be after start_time")
        return self


class ThemeResponse(BaseModel):
    """Schema for theme data in responses."""

    theme: Theme = Field(..., description="Theme")
    time_remaining_ms: int = Field(..., description="Milliseconds until the theme ends")


class RotationResponse(BaseModel):
    """Schema for the scheduled rotation result."""

    rotated: bool = Field(..., description="Whether a new theme was activated")
    theme: Theme | None = Field(None, description="Current theme after the run")
