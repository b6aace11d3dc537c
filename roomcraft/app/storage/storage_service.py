"""
Typed persistence for designs and themes.

StorageService owns the record store key schema. Other services build
keys through the helpers below so the layout lives in one place.
"""

import logging

from roomcraft.app.core.exceptions import StoreOperationError
from roomcraft.app.schemas.design import Design
from roomcraft.app.schemas.theme import Theme
from roomcraft.app.storage.record_store import RecordStore

logger = logging.getLogger(__name__)

CURRENT_THEME_KEY = "theme:current"
ARCHIVED_THEMES_KEY = "theme:archived"


def design_key(design_id: str) -> str:
    return f"design:{design_id}"


def user_designs_key(user_id: str) -> str:
    return f"user:{user_id}:designs"


def theme_key(theme_id: str) -> str:
    return f"theme:{theme_id}"


def theme_submissions_key(theme_id: str) -> str:
    return f"theme:{theme_id}:submissions"


def submission_key(user_id: str, theme_id: str) -> str:
    return f"submission:{user_id}:{theme_id}"


def vote_key(design_id: str, user_id: str) -> str:
    return f"votes:{design_id}:{user_id}"


def leaderboard_key(theme_id: str) -> str:
    return f"leaderboard:{theme_id}"


class StorageService:
    """Load and save Design and Theme records."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def save_design(self, design: Design) -> None:
        """Save a design and register it in its owner's design set."""
        try:
            await self.store.set(design_key(design.id), design.model_dump_json())
            await self.store.set_add(user_designs_key(design.user_id), [design.id])
            logger.debug(f"[STORAGE] Design {design.id} saved")
        except Exception as e:
            logger.error(f"[STORAGE] Failed to save design {design.id}: {e}")
            raise StoreOperationError("save design", e) from e

    async def load_design(self, design_id: str) -> Design | None:
        """Load a design by ID, or None if it does not exist."""
        try:
            value = await self.store.get(design_key(design_id))
        except Exception as e:
            logger.error(f"[STORAGE] Failed to load design {design_id}: {e}")
            raise StoreOperationError("load design", e) from e

        if value is None:
            return None
        return Design.model_validate_json(value)

    async def get_user_designs(self, user_id: str) -> list[Design]:
        """Load every design owned by a user."""
        try:
            design_ids = await self.store.set_members(user_designs_key(user_id))
        except Exception as e:
            logger.error(f"[STORAGE] Failed to list designs for user {user_id}: {e}")
            raise StoreOperationError("get user designs", e) from e

        designs = []
        for design_id in design_ids:
            design = await self.load_design(design_id)
            if design is not None:
                designs.append(design)
        return designs

    async def delete_design(self, design_id: str) -> None:
        """Delete a design record."""
        try:
            await self.store.delete(design_key(design_id))
            logger.info(f"[STORAGE] Design {design_id} deleted")
        except Exception as e:
            logger.error(f"[STORAGE] Failed to delete design {design_id}: {e}")
            raise StoreOperationError("delete design", e) from e

    async def save_theme(self, theme: Theme) -> None:
        """Save a theme; an active theme also becomes the current theme."""
        try:
            await self.store.set(theme_key(theme.id), theme.model_dump_json())
            if theme.active:
                await self.store.set(CURRENT_THEME_KEY, theme.id)
            logger.debug(f"[STORAGE] Theme {theme.id} saved (active={theme.active})")
        except Exception as e:
            logger.error(f"[STORAGE] Failed to save theme {theme.id}: {e}")
            raise StoreOperationError("save theme", e) from e

    async def load_theme(self, theme_id: str) -> Theme | None:
        """Load a theme by ID, or None if it does not exist."""
        try:
            value = await self.store.get(theme_key(theme_id))
        except Exception as e:
            logger.error(f"[STORAGE] Failed to load theme {theme_id}: {e}")
            raise StoreOperationError("load theme", e) from e

        if value is None:
            return None
        return Theme.model_validate_json(value)

    async def get_current_theme(self) -> Theme | None:
        """Follow the current-theme pointer."""
        try:
            current_id = await self.store.get(CURRENT_THEME_KEY)
        except Exception as e:
            logger.error(f"[STORAGE] Failed to read current theme pointer: {e}")
            raise StoreOperationError("get current theme", e) from e

        if not current_id:
            return None

        theme = await self.load_theme(current_id)
        if theme is None:
            logger.warning(f"[STORAGE] Current theme {current_id} has no record")
        return theme
