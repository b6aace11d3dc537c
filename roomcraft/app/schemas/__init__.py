"""Pydantic schemas for API request/response validation."""

from roomcraft.app.schemas.design import (
    PlacedAsset,
    Design,
    DesignCreate,
    DesignUpdate,
    AssetPlacement,
    AssetMove,
    BackgroundUpdate,
    DesignListResponse,
    SubmissionResponse,
    SubmissionStatusResponse,
)
from roomcraft.app.schemas.theme import Theme, ThemeCreate, ThemeResponse, RotationResponse
from roomcraft.app.schemas.vote import VoteType, Vote, VoteRequest, VoteResponse
from roomcraft.app.schemas.leaderboard import (
    LeaderboardEntry,
    LeaderboardResponse,
    TopDesignsResponse,
    UserRankResponse,
)
from roomcraft.app.schemas.asset import Asset, AssetCategory, AssetListResponse

__all__ = [
    "PlacedAsset",
    "Design",
    "DesignCreate",
    "DesignUpdate",
    "AssetPlacement",
    "AssetMove",
    "BackgroundUpdate",
    "DesignListResponse",
    "SubmissionResponse",
    "SubmissionStatusResponse",
    "Theme",
    "ThemeCreate",
    "ThemeResponse",
    "RotationResponse",
    "VoteType",
    "Vote",
    "VoteRequest",
    "VoteResponse",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "TopDesignsResponse",
    "UserRankResponse",
    "Asset",
    "AssetCategory",
    "AssetListResponse",
]
