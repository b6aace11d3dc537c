"""Vote API endpoints.

The design's vote count and its leaderboard score are updated by two
separate calls; the leaderboard step only runs for submitted designs.
"""

import logging

from fastapi import APIRouter, Depends, status

from roomcraft.app.api.deps import get_leaderboard, get_storage, get_voting_service
from roomcraft.app.core.exceptions import DesignNotFoundError
from roomcraft.app.schemas.vote import Vote, VoteRequest, VoteResponse, VoteType
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.services.voting import VotingService
from roomcraft.app.storage.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/designs", tags=["votes"])


async def _apply_to_leaderboard(
    design_id: str,
    delta: int,
    message: str,
    vote_type: VoteType | None,
    storage: StorageService,
    leaderboard: LeaderboardIndex,
) -> VoteResponse:
    design = await storage.load_design(design_id)
    if design is None:
        raise DesignNotFoundError(design_id)

    if delta and design.submitted:
        await leaderboard.update_vote_count(design_id, delta)

    return VoteResponse(
        message=message,
        design_id=design_id,
        vote_type=vote_type,
        delta=delta,
        vote_count=design.vote_count,
    )


@router.post("/{design_id}/vote", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    design_id: str,
    user_id: str,
    vote: VoteRequest,
    voting: VotingService = Depends(get_voting_service),
    storage: StorageService = Depends(get_storage),
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> VoteResponse:
    """Cast a vote on a design. Each user votes once per design."""
    delta = await voting.cast_vote(user_id, design_id, vote.vote_type)
    return await _apply_to_leaderboard(design_id, delta, "Vote recorded", vote.vote_type, storage, leaderboard)


@router.put("/{design_id}/vote", response_model=VoteResponse)
async def change_vote(
    design_id: str,
    user_id: str,
    vote: VoteRequest,
    voting: VotingService = Depends(get_voting_service),
    storage: StorageService = Depends(get_storage),
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> VoteResponse:
    """Change an existing vote."""
    delta = await voting.change_vote(user_id, design_id, vote.vote_type)
    message = "Vote changed" if delta else "Vote unchanged"
    return await _apply_to_leaderboard(design_id, delta, message, vote.vote_type, storage, leaderboard)


@router.delete("/{design_id}/vote", response_model=VoteResponse)
async def remove_vote(
    design_id: str,
    user_id: str,
    voting: VotingService = Depends(get_voting_service),
    storage: StorageService = Depends(get_storage),
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> VoteResponse:
    """Remove a vote."""
    delta = await voting.remove_vote(user_id, design_id)
    return await _apply_to_leaderboard(design_id, delta, "Vote removed", None, storage, leaderboard)


@router.get("/{design_id}/vote", response_model=Vote | None)
async def get_user_vote(
    design_id: str,
    user_id: str,
    voting: VotingService = Depends(get_voting_service),
) -> Vote | None:
    """Get a user's vote on a design; null when there is none."""
    return await voting.get_user_vote(user_id, design_id)
