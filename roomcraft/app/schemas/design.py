"""Design-related schemas."""

import re
import uuid

from pydantic import BaseModel, Field, field_validator

HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")
VALID_ROTATIONS = (0, 90, 180, 270)
DEFAULT_BACKGROUND_COLOR = "#FFFFFF"


def is_valid_hex_color(color: str) -> bool:
    """Return True for ``#RRGGBB`` strings."""
    return isinstance(color, str) and HEX_COLOR_PATTERN.match(color) is not None


class PlacedAsset(BaseModel):
    """One catalog asset positioned on a design's canvas."""

    instance_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Identity of this placement, independent of list position"
    )
    asset_id: str = Field(..., min_length=1, description="Catalog asset ID")
    x: int = Field(..., ge=0, description="Canvas x-coordinate")
    y: int = Field(..., ge=0, description="Canvas y-coordinate")
    rotation: int = Field(default=0, description="Rotation in degrees (0, 90, 180, 270)")
    z_index: int = Field(default=0, ge=0, description="Paint order hint")

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v: int) -> int:
        """Validate rotation is a quarter turn."""
        if v not in VALID_ROTATIONS:
            raise ValueError(f"rotation must be one of {VALID_ROTATIONS}")
        return v


class Design(BaseModel):
    """A user's spatial arrangement for one theme."""

    id: str = Field(..., min_length=1, description="Design ID")
    user_id: str = Field(..., min_length=1, description="Owner user ID")
    username: str = Field(..., min_length=1, description="Owner display name")
    theme_id: str = Field(..., min_length=1, description="Theme the design belongs to")
    background_color: str = Field(
        default=DEFAULT_BACKGROUND_COLOR,
        description="Canvas background color (#RRGGBB)"
    )
    assets: list[PlacedAsset] = Field(default_factory=list, description="Placed assets in list order")
    created_at: int = Field(..., gt=0, description="Creation time (epoch ms)")
    updated_at: int = Field(..., gt=0, description="Last modification time (epoch ms)")
    submitted: bool = Field(default=False, description="Whether the design was submitted")
    vote_count: int = Field(default=0, description="Upvotes minus downvotes")
    next_z_index: int = Field(default=0, ge=0, description="Z-index given to the next placed asset")

    @field_validator("background_color")
    @classmethod
    def validate_background_color(cls, v: str) -> str:
        """Validate background color is #RRGGBB."""
        if not is_valid_hex_color(v):
            raise ValueError("background_color must match #RRGGBB")
        return v


class DesignCreate(BaseModel):
    """Schema for creating a new design."""

    theme_id: str | None = Field(
        default=None,
        description="Theme ID; defaults to the current theme"
    )


class DesignUpdate(BaseModel):
    """Schema for saving the editor state of a design."""

    background_color: str = Field(..., description="Canvas background color (#RRGGBB)")
    assets: list[PlacedAsset] = Field(default_factory=list, description="Placed assets")

    @field_validator("background_color")
    @classmethod
    def validate_background_color(cls, v: str) -> str:
        """Validate background color is #RRGGBB."""
        if not is_valid_hex_color(v):
            raise ValueError("background_color must match #RRGGBB")
        return v


class AssetPlacement(BaseModel):
    """Schema for placing a catalog asset."""

    asset_id: str = Field(..., min_length=1, description="Catalog asset ID")
    x: int = Field(..., description="Requested x-coordinate (clamped to canvas)")
    y: int = Field(..., description="Requested y-coordinate (clamped to canvas)")


class AssetMove(BaseModel):
    """Schema for moving a placed asset."""

    x: int = Field(..., description="Requested x-coordinate (clamped to canvas)")
    y: int = Field(..., description="Requested y-coordinate (clamped to canvas)")


class BackgroundUpdate(BaseModel):
    """Schema for changing the background color."""

    color: str = Field(..., description="New background color (#RRGGBB)")


class DesignListResponse(BaseModel):
    """Schema for design list."""

    designs: list[Design] = Field(..., description="List of designs")


class SubmissionResponse(BaseModel):
    """Schema for a submission result."""

    design_id: str = Field(..., description="Submitted design ID")
    theme_id: str = Field(..., description="Theme the design was submitted to")
    resubmitted: bool = Field(..., description="Whether this replaced an earlier submission")


class SubmissionStatusResponse(BaseModel):
    """Schema for the duplicate-submission check."""

    user_id: str = Field(..., description="User ID")
    theme_id: str = Field(..., description="Theme ID")
    submitted: bool = Field(..., description="Whether the user already submitted")
