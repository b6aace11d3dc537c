"""Asset catalog schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class AssetCategory(str, Enum):
    """Catalog categories."""
    BOOKSHELF = "bookshelf"
    CHAIR = "chair"
    DECORATION = "decoration"
    ELECTRONICS = "electronics"
    FURNITURE = "furniture"
    LIGHTING = "lighting"
    PEOPLE = "people"
    RUG = "rug"


class Asset(BaseModel):
    """Catalog entry that can be placed on a canvas."""

    id: str = Field(..., min_length=1, description="Asset ID")
    name: str = Field(..., min_length=1, description="Display name")
    category: AssetCategory = Field(..., description="Catalog category")
    image_url: str = Field(..., min_length=1, description="Full-size image URL")
    thumbnail_url: str = Field(..., min_length=1, description="Thumbnail URL")
    width: int = Field(..., gt=0, description="Default display width in pixels")
    height: int = Field(..., gt=0, description="Default display height in pixels")


class AssetListResponse(BaseModel):
    """Schema for asset list."""

    assets: list[Asset] = Field(..., description="Catalog assets")
