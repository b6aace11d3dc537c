"""Theme API endpoints."""

import logging
import uuid

from fastapi import APIRouter, Depends, Query

from roomcraft.app.api.deps import get_submission_handler, get_theme_manager
from roomcraft.app.core.config import settings
from roomcraft.app.core.exceptions import InvalidThemeError, ThemeNotFoundError
from roomcraft.app.schemas.design import DesignListResponse, SubmissionStatusResponse
from roomcraft.app.schemas.theme import (
    RotationResponse,
    Theme,
    ThemeCreate,
    ThemeResponse,
)
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.services.theme_manager import HOUR_MS, ThemeManager
from roomcraft.app.services.theme_rotation import rotate_theme_if_expired

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/themes", tags=["themes"])


def _to_theme_response(theme: Theme, theme_manager: ThemeManager) -> ThemeResponse:
    return ThemeResponse(theme=theme, time_remaining_ms=theme_manager.get_time_remaining(theme))


@router.get("/current", response_model=ThemeResponse)
async def get_current_theme(
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> ThemeResponse:
    """Get the active theme and its remaining time."""
    theme = await theme_manager.get_current_theme()
    if theme is None:
        raise ThemeNotFoundError("current")
    return _to_theme_response(theme, theme_manager)


@router.post("/initialize", response_model=ThemeResponse)
async def initialize_default_theme(
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> ThemeResponse:
    """Create the default theme if no theme is active yet."""
    theme = await theme_manager.initialize_default_theme()
    return _to_theme_response(theme, theme_manager)


@router.post("/rotate", response_model=ThemeResponse)
async def rotate_theme(
    theme_data: ThemeCreate,
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> ThemeResponse:
    """Deactivate the current theme and activate a new one."""
    start_time = theme_data.start_time if theme_data.start_time is not None else theme_manager.now()
    if theme_data.end_time is not None:
        end_time = theme_data.end_time
    elif theme_data.duration_hours is not None:
        end_time = start_time + theme_data.duration_hours * HOUR_MS
    else:
        end_time = start_time + theme_manager.theme_duration_ms

    theme_id = f"theme_{uuid.uuid4().hex[:12]}"
    if end_time <= start_time:
        raise InvalidThemeError(theme_id, "end_time must be after start_time")

    theme = Theme(
        id=theme_id,
        name=theme_data.name,
        description=theme_data.description,
        start_time=start_time,
        end_time=end_time,
        active=False,
    )
    activated = await theme_manager.schedule_next_theme(theme)
    return _to_theme_response(activated, theme_manager)


@router.post("/rotate/scheduled", response_model=RotationResponse)
async def run_scheduled_rotation(
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> RotationResponse:
    """Rotate to the next theme in the cycle if the current one has ended."""
    rotated, theme = await rotate_theme_if_expired(theme_manager)
    return RotationResponse(rotated=rotated, theme=theme)


@router.get("/archived", response_model=list[str])
async def list_archived_themes(
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> list[str]:
    """List IDs of themes that have been rotated out."""
    return await theme_manager.get_archived_theme_ids()


@router.get("/{theme_id}", response_model=ThemeResponse)
async def get_theme(
    theme_id: str,
    theme_manager: ThemeManager = Depends(get_theme_manager),
) -> ThemeResponse:
    """Get a specific theme by ID, active or not."""
    theme = await theme_manager.get_theme_by_id(theme_id)
    if theme is None:
        raise ThemeNotFoundError(theme_id)
    return _to_theme_response(theme, theme_manager)


@router.get("/{theme_id}/submissions", response_model=DesignListResponse)
async def get_submitted_designs(
    theme_id: str,
    limit: int = Query(default=settings.submissions_page_size, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    submissions: SubmissionHandler = Depends(get_submission_handler),
) -> DesignListResponse:
    """List a theme's submitted designs, newest first."""
    designs = await submissions.get_submitted_designs(theme_id, limit=limit, offset=offset)
    return DesignListResponse(designs=designs)


@router.get("/{theme_id}/submitted/{user_id}", response_model=SubmissionStatusResponse)
async def has_user_submitted(
    theme_id: str,
    user_id: str,
    submissions: SubmissionHandler = Depends(get_submission_handler),
) -> SubmissionStatusResponse:
    """Check whether a user already submitted for a theme."""
    submitted = await submissions.has_user_submitted(user_id, theme_id)
    return SubmissionStatusResponse(user_id=user_id, theme_id=theme_id, submitted=submitted)
