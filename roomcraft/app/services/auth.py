"""Current-user identity.

The identity itself is resolved by the host platform; this service only
answers "who is acting" and fails when nobody is.
"""

import logging

from pydantic import BaseModel

from roomcraft.app.core.exceptions import AuthenticationRequiredError

logger = logging.getLogger(__name__)


class AuthenticatedUser(BaseModel):
    """Identity of the acting user."""

    id: str
    username: str


class AuthService:
    """Resolve the acting user for one unit of work."""

    def __init__(self, current_user: AuthenticatedUser | None = None):
        self._current_user = current_user

    async def get_current_user(self) -> AuthenticatedUser | None:
        return self._current_user

    async def is_authenticated(self) -> bool:
        return await self.get_current_user() is not None

    async def require_auth(self) -> AuthenticatedUser:
        """Return the acting user or raise AuthenticationRequiredError."""
        user = await self.get_current_user()
        if user is None:
            logger.info("[AUTH] Rejected anonymous request")
            raise AuthenticationRequiredError()
        return user

    async def is_owner(self, resource_user_id: str) -> bool:
        user = await self.get_current_user()
        return user is not None and user.id == resource_user_id
