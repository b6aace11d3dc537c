"""Vote-related schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class VoteType(str, Enum):
    """Vote direction."""
    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @property
    def weight(self) -> int:
        """Contribution of this vote to a design's score."""
        return 1 if self is VoteType.UPVOTE else -1


class Vote(BaseModel):
    """A user's vote on a design."""

    user_id: str = Field(..., description="Voter user ID")
    design_id: str = Field(..., description="Design ID")
    vote_type: VoteType = Field(..., description="Vote direction")
    timestamp: int = Field(..., description="Time the vote was cast or changed (epoch ms)")


class VoteRequest(BaseModel):
    """Schema for casting or changing a vote."""

    vote_type: VoteType = Field(..., description="Vote direction")


class VoteResponse(BaseModel):
    """Schema for a vote mutation result."""

    message: str = Field(..., description="Outcome message")
    design_id: str = Field(..., description="Design ID")
    vote_type: VoteType | None = Field(None, description="Vote after the operation")
    delta: int = Field(..., description="Change applied to the design's score")
    vote_count: int = Field(..., description="Design score after the operation")
