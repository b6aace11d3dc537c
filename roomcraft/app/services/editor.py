"""Editing session that wires design mutations to auto-save."""

import logging
from typing import Literal

from roomcraft.app.core.exceptions import DesignNotFoundError
from roomcraft.app.schemas.design import Design, PlacedAsset
from roomcraft.app.services.autosave import AutoSaveManager
from roomcraft.app.services.design_manager import DesignManager
from roomcraft.app.services.submission import SubmissionHandler

logger = logging.getLogger(__name__)


class DesignEditor:
    """
    Apply edits through DesignManager and schedule a debounced write
    after each one. Submitting flushes pending edits first.
    """

    def __init__(
        self,
        manager: DesignManager,
        autosave: AutoSaveManager,
        submissions: SubmissionHandler | None = None,
    ):
        self.manager = manager
        self.autosave = autosave
        self.submissions = submissions

    def open(self, design: Design) -> Design:
        return self.manager.load_design(design)

    def place_asset(self, design_id: str, asset_id: str, x: int, y: int) -> PlacedAsset:
        placed = self.manager.place_asset(design_id, asset_id, x, y)
        self._changed(design_id)
        return placed

    def move_asset(self, design_id: str, asset_index: int, x: int, y: int) -> PlacedAsset:
        moved = self.manager.move_asset(design_id, asset_index, x, y)
        self._changed(design_id)
        return moved

    def rotate_asset(self, design_id: str, asset_index: int) -> PlacedAsset:
        rotated = self.manager.rotate_asset(design_id, asset_index)
        self._changed(design_id)
        return rotated

    def remove_asset(self, design_id: str, asset_index: int) -> PlacedAsset:
        removed = self.manager.remove_asset(design_id, asset_index)
        self._changed(design_id)
        return removed

    def adjust_z_index(self, design_id: str, asset_index: int, direction: Literal["up", "down"]) -> PlacedAsset:
        adjusted = self.manager.adjust_z_index(design_id, asset_index, direction)
        self._changed(design_id)
        return adjusted

    def update_background_color(self, design_id: str, color: str) -> None:
        self.manager.update_background_color(design_id, color)
        self._changed(design_id)

    async def save_now(self, design_id: str) -> bool:
        return await self.autosave.force_save(self._design(design_id))

    async def submit(self, design_id: str) -> Design:
        """Flush pending edits and submit the design."""
        if self.submissions is None:
            raise RuntimeError("DesignEditor was created without a SubmissionHandler")

        design = self._design(design_id)
        await self.autosave.force_save(design)
        submitted = await self.submissions.submit_design(design)
        self.manager.load_design(submitted)
        return submitted

    def close(self) -> None:
        self.autosave.destroy()

    def _design(self, design_id: str) -> Design:
        design = self.manager.get_design(design_id)
        if design is None:
            raise DesignNotFoundError(design_id)
        return design

    def _changed(self, design_id: str) -> None:
        self.autosave.schedule_auto_save(self._design(design_id))
