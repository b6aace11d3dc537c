"""
Design state management.

DesignManager holds designs in memory for the duration of an editing
unit of work and applies placement, movement, rotation, removal and
background edits while keeping every placed asset inside the canvas.
"""

import logging
import uuid
from typing import Callable, Literal

from roomcraft.app.core.config import settings
from roomcraft.app.core.exceptions import (
    DesignNotFoundError,
    InvalidAssetIndexError,
    InvalidColorError,
)
from roomcraft.app.schemas.design import (
    DEFAULT_BACKGROUND_COLOR,
    Design,
    PlacedAsset,
    is_valid_hex_color,
)
from roomcraft.app.utils.clock import now_ms

logger = logging.getLogger(__name__)


class DesignManager:
    """
    Create and edit designs.

    Coordinates outside the canvas are clamped to the nearest edge rather
    than rejected. Placed assets get a z-index from a per-design counter
    that only moves forward, so removing an asset never frees its slot.

    Examples:
        >>> manager = DesignManager(canvas_width=800, canvas_height=600)
        >>> design = manager.create_design("u1", "theme_school_001", "alice")
        >>> asset = manager.place_asset(design.id, "chair_1", 900, -20)
        >>> (asset.x, asset.y)
        (800, 0)
    """

    def __init__(
        self,
        canvas_width: int | None = None,
        canvas_height: int | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        """
        Initialize design manager.

        Args:
            canvas_width: Canvas width; defaults to the configured width
            canvas_height: Canvas height; defaults to the configured height
            clock: Source of epoch-millisecond timestamps
        """
        self.canvas_width = canvas_width or settings.canvas_width
        self.canvas_height = canvas_height or settings.canvas_height
        self._clock = clock
        self._designs: dict[str, Design] = {}

    def create_design(self, user_id: str, theme_id: str, username: str = "user") -> Design:
        """Create an empty design owned by ``user_id`` for ``theme_id``."""
        now = self._clock()
        design = Design(
            id=f"design_{uuid.uuid4().hex}",
            user_id=user_id,
            username=username,
            theme_id=theme_id,
            background_color=DEFAULT_BACKGROUND_COLOR,
            assets=[],
            created_at=now,
            updated_at=now,
            submitted=False,
            vote_count=0,
            next_z_index=0,
        )
        self._designs[design.id] = design
        logger.info(f"[DESIGN] Created design {design.id} for user {user_id} in theme {theme_id}")
        return design

    def load_design(self, design: Design) -> Design:
        """Adopt a stored design so it can be edited."""
        # records written before the counter was stored only carry z-indices
        design.next_z_index = max(
            design.next_z_index,
            max((a.z_index for a in design.assets), default=-1) + 1,
        )
        self._designs[design.id] = design
        return design

    def get_design(self, design_id: str) -> Design | None:
        return self._designs.get(design_id)

    def get_all_designs(self) -> list[Design]:
        return list(self._designs.values())

    def delete_design(self, design_id: str) -> bool:
        """Forget a design. Returns False if it was not loaded."""
        return self._designs.pop(design_id, None) is not None

    def update_background_color(self, design_id: str, color: str) -> None:
        design = self._require_design(design_id)
        if not is_valid_hex_color(color):
            raise InvalidColorError(color)

        design.background_color = color
        self._touch(design)

    def place_asset(self, design_id: str, asset_id: str, x: int, y: int) -> PlacedAsset:
        """Append a catalog asset at the clamped position."""
        design = self._require_design(design_id)
        clamped_x, clamped_y = self.clamp(x, y)

        z_index = design.next_z_index
        design.next_z_index = z_index + 1

        placed = PlacedAsset(
            asset_id=asset_id,
            x=clamped_x,
            y=clamped_y,
            rotation=0,
            z_index=z_index,
        )
        design.assets.append(placed)
        self._touch(design)
        return placed

    def move_asset(self, design_id: str, asset_index: int, x: int, y: int) -> PlacedAsset:
        design = self._require_design(design_id)
        asset = self._require_asset(design, asset_index)

        asset.x, asset.y = self.clamp(x, y)
        self._touch(design)
        return asset

    def rotate_asset(self, design_id: str, asset_index: int) -> PlacedAsset:
        """Rotate an asset a quarter turn clockwise."""
        design = self._require_design(design_id)
        asset = self._require_asset(design, asset_index)

        asset.rotation = (asset.rotation + 90) % 360
        self._touch(design)
        return asset

    def remove_asset(self, design_id: str, asset_index: int) -> PlacedAsset:
        """Remove an asset; later assets shift down by one index."""
        design = self._require_design(design_id)
        self._require_asset(design, asset_index)

        removed = design.assets.pop(asset_index)
        self._touch(design)
        return removed

    def adjust_z_index(
        self,
        design_id: str,
        asset_index: int,
        direction: Literal["up", "down"],
    ) -> PlacedAsset:
        """Raise or lower an asset's paint order. Lowering stops at 0."""
        design = self._require_design(design_id)
        asset = self._require_asset(design, asset_index)

        if direction == "up":
            asset.z_index += 1
            # keep the counter ahead of every z-index in use
            design.next_z_index = max(design.next_z_index, asset.z_index + 1)
        elif direction == "down":
            asset.z_index = max(0, asset.z_index - 1)
        else:
            raise ValueError(f"direction must be 'up' or 'down', got {direction!r}")

        self._touch(design)
        return asset

    def replace_assets(self, design_id: str, assets: list[PlacedAsset]) -> list[PlacedAsset]:
        """Replace the whole asset list, clamping every position into the canvas."""
        design = self._require_design(design_id)

        placed = []
        for asset in assets:
            x, y = self.clamp(asset.x, asset.y)
            placed.append(asset.model_copy(update={"x": x, "y": y}))

        design.assets = placed
        design.next_z_index = max(
            design.next_z_index,
            max((a.z_index for a in placed), default=-1) + 1,
        )
        self._touch(design)
        return placed

    def clamp(self, x: int, y: int) -> tuple[int, int]:
        """Clamp a coordinate pair into the canvas."""
        return (
            max(0, min(int(x), self.canvas_width)),
            max(0, min(int(y), self.canvas_height)),
        )

    def _require_design(self, design_id: str) -> Design:
        design = self._designs.get(design_id)
        if design is None:
            raise DesignNotFoundError(design_id)
        return design

    @staticmethod
    def _require_asset(design: Design, asset_index: int) -> PlacedAsset:
        if asset_index < 0 or asset_index >= len(design.assets):
            raise InvalidAssetIndexError(asset_index, len(design.assets))
        return design.assets[asset_index]

    def _touch(self, design: Design) -> None:
        design.updated_at = max(self._clock(), design.updated_at)
