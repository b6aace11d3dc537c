"""Request-scoped dependencies.

Every request gets its own database session and a fresh set of services
built on it; nothing is shared between requests except the asset catalog.
"""

from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from roomcraft.app.core.config import settings
from roomcraft.app.db.base import get_db
from roomcraft.app.services.asset_catalog import AssetCatalog
from roomcraft.app.services.auth import AuthenticatedUser, AuthService
from roomcraft.app.services.design_manager import DesignManager
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.services.theme_manager import ThemeManager
from roomcraft.app.services.voting import VotingService
from roomcraft.app.storage.record_store import SqlRecordStore
from roomcraft.app.storage.storage_service import StorageService


def get_storage(db: AsyncSession = Depends(get_db)) -> StorageService:
    return StorageService(SqlRecordStore(db))


def get_auth_service(
    x_user_id: str | None = Header(default=None),
    x_username: str | None = Header(default=None),
) -> AuthService:
    """Build the identity from the headers set by the host platform."""
    if not x_user_id:
        return AuthService(None)
    return AuthService(AuthenticatedUser(id=x_user_id, username=x_username or x_user_id))


def get_design_manager() -> DesignManager:
    return DesignManager(canvas_width=settings.canvas_width, canvas_height=settings.canvas_height)


def get_leaderboard(storage: StorageService = Depends(get_storage)) -> LeaderboardIndex:
    return LeaderboardIndex(storage)


def get_voting_service(
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
) -> VotingService:
    return VotingService(storage, auth)


def get_submission_handler(
    storage: StorageService = Depends(get_storage),
    auth: AuthService = Depends(get_auth_service),
    leaderboard: LeaderboardIndex = Depends(get_leaderboard),
) -> SubmissionHandler:
    return SubmissionHandler(storage, auth, leaderboard)


def get_theme_manager(storage: StorageService = Depends(get_storage)) -> ThemeManager:
    return ThemeManager(storage, theme_duration_hours=settings.theme_duration_hours)


@lru_cache
def get_asset_catalog() -> AssetCatalog:
    catalog = AssetCatalog()
    catalog.load_assets()
    return catalog
