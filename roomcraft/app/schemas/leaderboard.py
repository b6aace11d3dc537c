"""Leaderboard schemas."""

from pydantic import BaseModel, Field

from roomcraft.app.schemas.design import Design


class LeaderboardEntry(BaseModel):
    """Leaderboard entry."""

    rank: int = Field(..., ge=1, description="1-based rank")
    design: Design = Field(..., description="Ranked design")
    username: str = Field(..., description="Design owner's name")
    vote_count: int = Field(..., description="Net vote score")


class LeaderboardResponse(BaseModel):
    """Schema for a theme's leaderboard."""

    theme_id: str = Field(..., description="Theme ID")
    entries: list[LeaderboardEntry] = Field(..., description="Entries by descending score")


class TopDesignsResponse(BaseModel):
    """Schema for top-N designs."""

    theme_id: str = Field(..., description="Theme ID")
    designs: list[Design] = Field(..., description="Designs by descending score")


class UserRankResponse(BaseModel):
    """Schema for a user's rank."""

    user_id: str = Field(..., description="User ID")
    theme_id: str = Field(..., description="Theme ID")
    rank: int = Field(..., description="1-based rank, or -1 without a ranked submission")
