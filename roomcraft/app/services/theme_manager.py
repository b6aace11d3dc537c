"""
Theme management.

Exactly one theme is active at a time and the ``theme:current`` pointer
always names it. Rotation only flips ``active`` flags and moves the
pointer: designs, votes and leaderboards of earlier themes stay where
they are, keyed by their original theme ID.
"""

import logging
from typing import Callable

from roomcraft.app.core.exceptions import InvalidThemeError, StoreOperationError
from roomcraft.app.schemas.theme import Theme
from roomcraft.app.storage.storage_service import ARCHIVED_THEMES_KEY, StorageService
from roomcraft.app.utils.clock import now_ms

logger = logging.getLogger(__name__)

HOUR_MS = 60 * 60 * 1000
DEFAULT_THEME_ID = "theme_school_001"
DEFAULT_THEME_NAME = "School"
DEFAULT_THEME_DESCRIPTION = "Design a classroom or study space"


class ThemeManager:
    """Own the active theme and the rotation protocol."""

    def __init__(
        self,
        storage: StorageService,
        theme_duration_hours: int = 24,
        clock: Callable[[], int] = now_ms,
    ):
        self.storage = storage
        self.theme_duration_ms = theme_duration_hours * HOUR_MS
        self._clock = clock

    async def get_current_theme(self) -> Theme | None:
        return await self.storage.get_current_theme()

    async def get_theme_by_id(self, theme_id: str) -> Theme | None:
        return await self.storage.load_theme(theme_id)

    def now(self) -> int:
        return self._clock()

    def get_time_remaining(self, theme: Theme) -> int:
        """Milliseconds until the theme ends, never negative."""
        return max(0, theme.end_time - self.now())

    async def initialize_default_theme(self) -> Theme:
        """Create and activate the default theme unless one is current."""
        current = await self.get_current_theme()
        if current is not None:
            return current

        now = self._clock()
        theme = Theme(
            id=DEFAULT_THEME_ID,
            name=DEFAULT_THEME_NAME,
            description=DEFAULT_THEME_DESCRIPTION,
            start_time=now,
            end_time=now + self.theme_duration_ms,
            active=True,
        )
        await self.storage.save_theme(theme)
        logger.info(f"[THEME] Default theme '{theme.name}' initialized")
        return theme

    async def schedule_next_theme(self, theme: Theme) -> Theme:
        """
        Deactivate the current theme and activate ``theme``.

        The previous theme is saved with ``active=False`` and recorded in
        the archived set; nothing else about it changes.

        Args:
            theme: Theme to activate

        Returns:
            The activated theme

        Raises:
            InvalidThemeError: The theme does not end after it starts
        """
        if theme.end_time <= theme.start_time:
            raise InvalidThemeError(theme.id, "end_time must be after start_time")

        current = await self.get_current_theme()
        if current is not None and current.id != theme.id:
            deactivated = current.model_copy(update={"active": False})
            await self.storage.save_theme(deactivated)
            await self.archive_theme(deactivated.id)
            logger.info(f"[THEME] Deactivated theme {deactivated.id}")

        activated = theme.model_copy(update={"active": True})
        await self.storage.save_theme(activated)
        logger.info(f"[THEME] Activated theme {activated.id} ({activated.name})")
        return activated

    async def archive_theme(self, theme_id: str) -> None:
        """Record a finished theme so its history can be listed."""
        try:
            await self.storage.store.set_add(ARCHIVED_THEMES_KEY, [theme_id])
        except Exception as e:
            logger.error(f"[THEME] Failed to archive theme {theme_id}: {e}")
            raise StoreOperationError("archive theme", e) from e

    async def get_archived_theme_ids(self) -> list[str]:
        try:
            return await self.storage.store.set_members(ARCHIVED_THEMES_KEY)
        except Exception as e:
            logger.error(f"[THEME] Failed to list archived themes: {e}")
            raise StoreOperationError("list archived themes", e) from e
