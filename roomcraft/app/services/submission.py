"""
Design submission.

Submitting stores the design with ``submitted=True``, records a
per-(user, theme) marker, adds the design to the theme's submitted set
and seeds its leaderboard entry. A user gets one submission per theme.
Submitting the same design again updates the stored record in place.
"""

import logging

from roomcraft.app.core.exceptions import AlreadySubmittedError, NotOwnerError, StoreOperationError
from roomcraft.app.schemas.design import Design
from roomcraft.app.services.auth import AuthService
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.storage.storage_service import (
    StorageService,
    submission_key,
    theme_submissions_key,
)
from roomcraft.app.utils.clock import now_ms

logger = logging.getLogger(__name__)


class SubmissionHandler:
    """Submit designs and list submissions."""

    def __init__(self, storage: StorageService, auth: AuthService, leaderboard: LeaderboardIndex):
        self.storage = storage
        self.store = storage.store
        self.auth = auth
        self.leaderboard = leaderboard

    async def submit_design(self, design: Design) -> Design:
        """
        Submit a design owned by the authenticated user.

        Args:
            design: Design to submit

        Returns:
            The stored, submitted design

        Raises:
            AuthenticationRequiredError: Nobody is logged in
            NotOwnerError: The design belongs to another user
            AlreadySubmittedError: Another design is already submitted for the theme
        """
        user = await self.auth.require_auth()
        if design.user_id != user.id:
            raise NotOwnerError(design.id)

        existing_id = await self.get_submitted_design_id(design.user_id, design.theme_id)
        if existing_id is not None and existing_id != design.id:
            raise AlreadySubmittedError(design.user_id, design.theme_id, existing_id)

        # Keep the score already recorded for a re-submission.
        stored = await self.storage.load_design(design.id)
        vote_count = stored.vote_count if stored is not None else design.vote_count

        submitted = design.model_copy(
            update={
                "username": user.username,
                "submitted": True,
                "vote_count": vote_count,
                "updated_at": max(now_ms(), design.updated_at),
            }
        )
        await self.storage.save_design(submitted)

        try:
            await self.store.set(submission_key(design.user_id, design.theme_id), design.id)
            await self.store.set_add(theme_submissions_key(design.theme_id), [design.id])
        except Exception as e:
            logger.error(f"[SUBMIT] Failed to record submission of design {design.id}: {e}")
            raise StoreOperationError("submit design", e) from e

        await self.leaderboard.add_design(submitted)

        logger.info(f"[SUBMIT] Design {design.id} submitted by user {user.id} for theme {design.theme_id}")
        return submitted

    async def has_user_submitted(self, user_id: str, theme_id: str) -> bool:
        return await self.get_submitted_design_id(user_id, theme_id) is not None

    async def get_submitted_design_id(self, user_id: str, theme_id: str) -> str | None:
        try:
            return await self.store.get(submission_key(user_id, theme_id))
        except Exception as e:
            logger.error(f"[SUBMIT] Failed to check submission for {user_id}/{theme_id}: {e}")
            raise StoreOperationError("check submission", e) from e

    async def get_submitted_designs(self, theme_id: str, limit: int = 10, offset: int = 0) -> list[Design]:
        """Return one page of a theme's submitted designs, newest first."""
        try:
            design_ids = await self.store.set_members(theme_submissions_key(theme_id))
        except Exception as e:
            logger.error(f"[SUBMIT] Failed to list submissions for theme {theme_id}: {e}")
            raise StoreOperationError("get submitted designs", e) from e

        designs = []
        for design_id in design_ids:
            design = await self.storage.load_design(design_id)
            if design is not None and design.submitted:
                designs.append(design)

        designs.sort(key=lambda d: d.created_at, reverse=True)
        return designs[offset:offset + limit]

    async def get_user_designs(self, user_id: str) -> list[Design]:
        return await self.storage.get_user_designs(user_id)

    async def get_design_by_id(self, design_id: str) -> Design | None:
        return await self.storage.load_design(design_id)
