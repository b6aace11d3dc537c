"""
Voting service.

Each (voter, design) pair moves through: no vote -> upvote/downvote ->
changed -> removed. The service stores one vote record per pair and keeps
the design's ``vote_count`` equal to upvotes minus downvotes by applying
signed deltas.

The leaderboard score is a separate record. Callers apply the returned
delta to LeaderboardIndex as a second, independent step.
"""

import logging

from roomcraft.app.core.exceptions import (
    CannotActForAnotherUserError,
    DesignNotFoundError,
    RoomCraftException,
    SelfVoteForbiddenError,
    StoreOperationError,
    VoteAlreadyExistsError,
    VoteNotFoundError,
)
from roomcraft.app.schemas.design import Design
from roomcraft.app.schemas.vote import Vote, VoteType
from roomcraft.app.services.auth import AuthService
from roomcraft.app.storage.storage_service import StorageService, vote_key
from roomcraft.app.utils.clock import now_ms

logger = logging.getLogger(__name__)


class VotingService:
    """Record votes and keep design scores in step with them."""

    def __init__(self, storage: StorageService, auth: AuthService):
        self.storage = storage
        self.store = storage.store
        self.auth = auth

    async def cast_vote(self, user_id: str, design_id: str, vote_type: VoteType) -> int:
        """
        Cast a first vote on a design.

        Args:
            user_id: Voter; must be the authenticated user
            design_id: Design being voted on
            vote_type: Vote direction

        Returns:
            The score delta applied (+1 or -1)

        Raises:
            AuthenticationRequiredError: Nobody is logged in
            CannotActForAnotherUserError: ``user_id`` is not the logged-in user
            DesignNotFoundError: The design does not exist
            SelfVoteForbiddenError: The voter owns the design
            VoteAlreadyExistsError: The voter already voted; use change_vote
        """
        await self._require_actor(user_id, "cast vote")
        await self.prevent_self_vote(user_id, design_id)

        if await self.get_user_vote(user_id, design_id) is not None:
            raise VoteAlreadyExistsError(user_id, design_id)

        await self._write_vote(user_id, design_id, vote_type)
        delta = vote_type.weight
        await self._update_vote_count(design_id, delta)

        logger.info(f"[VOTE] User {user_id} cast {vote_type.value} on design {design_id}")
        return delta

    async def change_vote(self, user_id: str, design_id: str, new_vote_type: VoteType) -> int:
        """
        Replace an existing vote.

        Returns:
            The score delta applied: 0 for the same direction, otherwise +2 or -2
        """
        await self._require_actor(user_id, "change vote")

        existing = await self.get_user_vote(user_id, design_id)
        if existing is None:
            raise VoteNotFoundError(user_id, design_id)

        if existing.vote_type == new_vote_type:
            return 0

        delta = new_vote_type.weight - existing.vote_type.weight
        await self._write_vote(user_id, design_id, new_vote_type)
        await self._update_vote_count(design_id, delta)

        logger.info(
            f"[VOTE] User {user_id} changed vote on design {design_id} "
            f"from {existing.vote_type.value} to {new_vote_type.value}"
        )
        return delta

    async def remove_vote(self, user_id: str, design_id: str) -> int:
        """
        Withdraw a vote.

        Returns:
            The score delta applied, reversing the removed vote
        """
        await self._require_actor(user_id, "remove vote")

        existing = await self.get_user_vote(user_id, design_id)
        if existing is None:
            raise VoteNotFoundError(user_id, design_id)

        try:
            await self.store.delete(vote_key(design_id, user_id))
        except Exception as e:
            logger.error(f"[VOTE] Failed to delete vote {user_id}/{design_id}: {e}")
            raise StoreOperationError("remove vote", e) from e

        delta = -existing.vote_type.weight
        await self._update_vote_count(design_id, delta)

        logger.info(f"[UNVOTE] User {user_id} removed {existing.vote_type.value} from design {design_id}")
        return delta

    async def get_user_vote(self, user_id: str, design_id: str) -> Vote | None:
        """Return the user's vote on a design, or None."""
        try:
            value = await self.store.get(vote_key(design_id, user_id))
        except Exception as e:
            logger.error(f"[VOTE] Failed to read vote {user_id}/{design_id}: {e}")
            raise StoreOperationError("get vote", e) from e

        if value is None:
            return None
        return Vote.model_validate_json(value)

    async def prevent_self_vote(self, user_id: str, design_id: str) -> Design:
        """Raise if the design is missing or owned by the voter."""
        design = await self.storage.load_design(design_id)
        if design is None:
            raise DesignNotFoundError(design_id)
        if design.user_id == user_id:
            raise SelfVoteForbiddenError(design_id)
        return design

    async def _require_actor(self, user_id: str, action: str) -> None:
        user = await self.auth.require_auth()
        if user.id != user_id:
            raise CannotActForAnotherUserError(action, user_id)

    async def _write_vote(self, user_id: str, design_id: str, vote_type: VoteType) -> None:
        vote = Vote(
            user_id=user_id,
            design_id=design_id,
            vote_type=vote_type,
            timestamp=now_ms(),
        )
        try:
            await self.store.set(vote_key(design_id, user_id), vote.model_dump_json())
        except Exception as e:
            logger.error(f"[VOTE] Failed to store vote {user_id}/{design_id}: {e}")
            raise StoreOperationError("store vote", e) from e

    async def _update_vote_count(self, design_id: str, delta: int) -> int:
        try:
            design = await self.storage.load_design(design_id)
            if design is None:
                raise DesignNotFoundError(design_id)

            design.vote_count += delta
            design.updated_at = max(now_ms(), design.updated_at)
            await self.storage.save_design(design)
        except RoomCraftException:
            raise
        except Exception as e:
            logger.error(f"[VOTE] Failed to update vote count for design {design_id}: {e}")
            raise StoreOperationError("update vote count", e) from e

        logger.debug(f"[VOTE] Design {design_id} vote count {delta:+d} -> {design.vote_count}")
        return design.vote_count
