"""
Leaderboard index.

Each theme has a score-ordered set mapping design IDs to their net vote
score. Entries are seeded when a design is submitted and moved by the
deltas VotingService reports. Ranks are computed on read.
"""

import logging

from roomcraft.app.core.exceptions import DesignNotFoundError, RoomCraftException, StoreOperationError
from roomcraft.app.schemas.design import Design
from roomcraft.app.schemas.leaderboard import LeaderboardEntry
from roomcraft.app.storage.storage_service import StorageService, leaderboard_key

logger = logging.getLogger(__name__)


class LeaderboardIndex:
    """
    Per-theme ranking of designs by vote score.

    Scores may be negative. Designs with equal scores keep the order in
    which they entered the index.
    """

    def __init__(self, storage: StorageService):
        self.storage = storage
        self.store = storage.store

    async def add_design(self, design: Design) -> bool:
        """Seed a design's entry with its current vote count.

        Returns:
            True if the entry was new; an existing entry keeps its score
        """
        try:
            added = await self.store.ranked_add(
                leaderboard_key(design.theme_id),
                [(design.id, design.vote_count)],
            )
        except Exception as e:
            logger.error(f"[LEADERBOARD] Failed to index design {design.id}: {e}")
            raise StoreOperationError("add design to leaderboard", e) from e
        return added > 0

    async def update_vote_count(self, design_id: str, delta: int) -> int:
        """Apply a score delta to a design's entry, creating it if absent.

        Returns:
            The design's new leaderboard score
        """
        try:
            design = await self.storage.load_design(design_id)
            if design is None:
                raise DesignNotFoundError(design_id)

            score = await self.store.ranked_increment(leaderboard_key(design.theme_id), delta, design_id)
        except RoomCraftException:
            raise
        except Exception as e:
            logger.error(f"[LEADERBOARD] Failed to update score for design {design_id}: {e}")
            raise StoreOperationError("update vote count", e) from e

        logger.info(f"[LEADERBOARD] Design {design_id} {delta:+d} -> {int(score)}")
        return int(score)

    async def get_top_designs(self, theme_id: str, limit: int = 10) -> list[Design]:
        """Return up to ``limit`` designs by descending score."""
        if limit <= 0:
            return []

        try:
            design_ids = await self.store.ranked_range_desc(leaderboard_key(theme_id), 0, limit - 1)
        except Exception as e:
            logger.error(f"[LEADERBOARD] Failed to read top designs for theme {theme_id}: {e}")
            raise StoreOperationError("get top designs", e) from e

        return await self._load_designs(design_ids)

    async def get_user_rank(self, user_id: str, theme_id: str) -> int:
        """Return the 1-based rank of the user's submitted design, or -1."""
        user_designs = await self.storage.get_user_designs(user_id)
        submitted = next(
            (d for d in user_designs if d.theme_id == theme_id and d.submitted),
            None,
        )
        if submitted is None:
            return -1

        try:
            rank = await self.store.ranked_rank_desc(leaderboard_key(theme_id), submitted.id)
        except Exception as e:
            logger.error(f"[LEADERBOARD] Failed to read rank for user {user_id}: {e}")
            raise StoreOperationError("get user rank", e) from e

        if rank is None:
            return -1
        return rank + 1

    async def get_leaderboard_by_theme(self, theme_id: str) -> list[LeaderboardEntry]:
        """Return every ranked design with contiguous 1-based ranks."""
        try:
            design_ids = await self.store.ranked_range_desc(leaderboard_key(theme_id), 0, -1)
        except Exception as e:
            logger.error(f"[LEADERBOARD] Failed to read leaderboard for theme {theme_id}: {e}")
            raise StoreOperationError("get leaderboard", e) from e

        designs = await self._load_designs(design_ids)
        return [
            LeaderboardEntry(
                rank=rank,
                design=design,
                username=design.username,
                vote_count=design.vote_count,
            )
            for rank, design in enumerate(designs, start=1)
        ]

    async def _load_designs(self, design_ids: list[str]) -> list[Design]:
        designs = []
        for design_id in design_ids:
            design = await self.storage.load_design(design_id)
            if design is None:
                logger.warning(f"[LEADERBOARD] Indexed design {design_id} has no record")
                continue
            designs.append(design)
        return designs
