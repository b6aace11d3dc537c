"""Leaderboard API endpoints."""

from fastapi import APIRouter, Depends, Query

from roomcraft.app.api.deps import get_leaderboard
from roomcraft.app.core.config import settings
from roomcraft.app.schemas.leaderboard import (
    LeaderboardResponse,
    TopDesignsResponse,
    UserRankResponse,
)
from roomcraft.app.services.leaderboard import LeaderboardIndex

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get("/{theme_id}", response_model=LeaderboardResponse)
async def get_leaderboard_by_theme(
    theme_id: str,
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> LeaderboardResponse:
    """Get every ranked design of a theme."""
    entries = await leaderboard.get_leaderboard_by_theme(theme_id)
    return LeaderboardResponse(theme_id=theme_id, entries=entries)


@router.get("/{theme_id}/top", response_model=TopDesignsResponse)
async def get_top_designs(
    theme_id: str,
    limit: int = Query(default=settings.leaderboard_default_limit, ge=1, le=100),
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> TopDesignsResponse:
    """Get the highest scoring designs of a theme."""
    designs = await leaderboard.get_top_designs(theme_id, limit)
    return TopDesignsResponse(theme_id=theme_id, designs=designs)


@router.get("/{theme_id}/rank/{user_id}", response_model=UserRankResponse)
async def get_user_rank(
    theme_id: str,
    user_id: str,
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> UserRankResponse:
    """Get a user's rank in a theme (-1 without a submission)."""
    rank = await leaderboard.get_user_rank(user_id, theme_id)
    return UserRankResponse(user_id=user_id, theme_id=theme_id, rank=rank)
