"""Service layer.

The HTTP routers build these per request. ``DesignEditor`` and
``AutoSaveManager`` are meant for a long-lived editing session held by the
host process, where edits arrive faster than they should be written.
"""

from roomcraft.app.services.auth import AuthenticatedUser, AuthService
from roomcraft.app.services.asset_catalog import AssetCatalog
from roomcraft.app.services.autosave import AutoSaveManager, SaveStatus
from roomcraft.app.services.design_manager import DesignManager
from roomcraft.app.services.leaderboard import LeaderboardIndex
from roomcraft.app.services.submission import SubmissionHandler
from roomcraft.app.services.editor import DesignEditor
from roomcraft.app.services.theme_manager import ThemeManager
from roomcraft.app.services.theme_rotation import generate_next_theme, rotate_theme_if_expired
from roomcraft.app.services.voting import VotingService

__all__ = [
    "AuthenticatedUser",
    "AuthService",
    "AssetCatalog",
    "AutoSaveManager",
    "SaveStatus",
    "DesignManager",
    "LeaderboardIndex",
    "SubmissionHandler",
    "DesignEditor",
    "ThemeManager",
    "generate_next_theme",
    "rotate_theme_if_expired",
    "VotingService",
]
