"""Design API endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from roomcraft.app.api.deps import (
    get_auth_service,
    get_design_manager,
    get_storage,
    get_submission_handler,
    get_theme_manager,
)
from roomcraft.app.core.exceptions import DesignNotFoundError, NotOwnerError, ThemeNotFoundError
from roomcraft.app.schemas.design import (
    AssetMove,
    AssetPlacement,
    BackgroundUpdate,
    Design,
    DesignCreate,
    DesignListResponse,
    DesignUpdate,
    SubmissionResponse,
)
from roomcraft.app.services.auth import AuthService
from roomcraft.app.services.design_manager import DesignManager
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.services.theme_manager import ThemeManager
from roomcraft.app.storage.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/designs", tags=["designs"])


async def _load_owned_design(
    design_id: str,
    storage: StorageService,
    auth: AuthService,
    manager: DesignManager,
) -> Design:
    """Load a design the current user owns into the manager."""
    user = await auth.require_auth()
    design = await storage.load_design(design_id)
    if design is None:
        raise DesignNotFoundError(design_id)
    if design.user_id != user.id:
        raise NotOwnerError(design_id)
    return manager.load_design(design)


@router.post("/", response_model=Design, status_code=status.HTTP_201_CREATED)
async def create_design(
    design_data: DesignCreate,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> Design:
    """Create an empty design for the current theme (or a given theme)."""
    user = await auth.require_auth()

    if design_data.theme_id is not None:
        theme = await theme_manager.get_theme_by_id(design_data.theme_id)
        if theme is None:
            raise ThemeNotFoundError(design_data.theme_id)
    else:
        theme = await theme_manager.get_current_theme()
        if theme is None:
            raise ThemeNotFoundError("current")

    design = manager.create_design(user.id, theme.id, user.username)
    await storage.save_design(design)
    return design


@router.get("/user/{user_id}", response_model=DesignListResponse)
async def list_user_designs(
    user_id: str,
    submissions: SubmissionHandler = Depends(get_submission_handler),
) -> DesignListResponse:
    """List every design owned by a user."""
    designs = await submissions.get_user_designs(user_id)
    designs.sort(key=lambda d: d.updated_at, reverse=True)
    return DesignListResponse(designs=designs)


@router.get("/{design_id}", response_model=Design)
async def get_design(
    design_id: str,
    storage: StorageService = Depends(get_storage),
) -> Design:
    """Get a specific design by ID."""
    design = await storage.load_design(design_id)
    if design is None:
        raise DesignNotFoundError(design_id)
    return design


@router.put("/{design_id}", response_model=Design)
async def save_design(
    design_id: str,
    design_update: DesignUpdate,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Save the editor state of a design (owner only).

    Positions outside the canvas are clamped.
    """
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.update_background_color(design.id, design_update.background_color)
    manager.replace_assets(design.id, design_update.assets)
    await storage.save_design(design)
    return design


@router.put("/{design_id}/background", response_model=Design)
async def update_background(
    design_id: str,
    background: BackgroundUpdate,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Change a design's background color."""
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.update_background_color(design.id, background.color)
    await storage.save_design(design)
    return design


@router.post("/{design_id}/assets", response_model=Design, status_code=status.HTTP_201_CREATED)
async def place_asset(
    design_id: str,
    placement: AssetPlacement,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Place a catalog asset on the canvas."""
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.place_asset(design.id, placement.asset_id, placement.x, placement.y)
    await storage.save_design(design)
    return design


@router.patch("/{design_id}/assets/{asset_index}", response_model=Design)
async def move_asset(
    design_id: str,
    asset_index: int,
    move: AssetMove,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Move a placed asset."""
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.move_asset(design.id, asset_index, move.x, move.y)
    await storage.save_design(design)
    return design


@router.post("/{design_id}/assets/{asset_index}/rotate", response_model=Design)
async def rotate_asset(
    design_id: str,
    asset_index: int,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Rotate a placed asset by 90 degrees."""
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.rotate_asset(design.id, asset_index)
    await storage.save_design(design)
    return design


@router.delete("/{design_id}/assets/{asset_index}", response_model=Design)
async def remove_asset(
    design_id: str,
    asset_index: int,
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    manager: DesignManager = Depends(get_design_manager),
) -> Design:
    """Remove a placed asset. Later assets shift down by one index."""
    design = await _load_owned_design(design_id, storage, auth, manager)
    manager.remove_asset(design.id, asset_index)
    await storage.save_design(design)
    return design


@router.post("/{design_id}/submit", response_model=SubmissionResponse)
async def submit_design(
    design_id: str,
    storage: StorageService = Depends(get_storage),
    submissions: SubmissionHandler = Depends(get_submission_handler),
) -> SubmissionResponse:
    """Submit a design to its theme.

    Submitting again updates the stored submission in place.
    """
    design = await storage.load_design(design_id)
    if design is None:
        raise DesignNotFoundError(design_id)

    resubmitted = await submissions.has_user_submitted(design.user_id, design.theme_id)
    submitted = await submissions.submit_design(design)
    return SubmissionResponse(
        design_id=submitted.id,
        theme_id=submitted.theme_id,
        resubmitted=resubmitted,
    )
