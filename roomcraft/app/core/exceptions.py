"""Custom exception classes for RoomCraft application."""


class RoomCraftException(Exception):
    """Base exception for all RoomCraft-specific errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class AuthenticationRequiredError(RoomCraftException):
    """Raised when an operation needs a logged-in user and none is available."""

    def __init__(self):
        super().__init__(
            message="Authentication required. Please log in.",
            details="No user identity was supplied with the request"
        )


class CannotActForAnotherUserError(RoomCraftException):
    """Raised when the authenticated user acts on behalf of a different user."""

    def __init__(self, action: str, user_id: str):
        super().__init__(
            message=f"Cannot {action} for another user",
            details=f"The authenticated user is not {user_id}"
        )
        self.action = action
        self.user_id = user_id


class NotOwnerError(RoomCraftException):
    """Raised when a user modifies a design that belongs to someone else."""

    def __init__(self, design_id: str):
        super().__init__(
            message=f"Design {design_id} does not belong to you",
            details="Only the owner of a design can save or submit it"
        )
        self.design_id = design_id


class SelfVoteForbiddenError(RoomCraftException):
    """Raised when a user votes on their own design."""

    def __init__(self, design_id: str):
        super().__init__(
            message="You cannot vote on your own design",
            details=f"Design {design_id} is owned by the voter"
        )
        self.design_id = design_id


class DesignNotFoundError(RoomCraftException):
    """Raised when a design is not found."""

    def __init__(self, design_id: str):
        super().__init__(
            message=f"Design not found: {design_id}",
            details="The requested design does not exist"
        )
        self.design_id = design_id


class InvalidAssetIndexError(RoomCraftException):
    """Raised when an asset index is outside the design's asset list."""

    def __init__(self, index: int, size: int):
        super().__init__(
            message=f"Invalid asset index: {index}",
            details=f"The design has {size} placed assets"
        )
        self.index = index
        self.size = size


class InvalidColorError(RoomCraftException):
    """Raised when a background color is not a #RRGGBB hex string."""

    def __init__(self, color: str):
        super().__init__(
            message=f"Invalid hex color: {color}",
            details="Colors must use the #RRGGBB format"
        )
        self.color = color


class VoteAlreadyExistsError(RoomCraftException):
    """Raised when casting a second vote on the same design."""

    def __init__(self, user_id: str, design_id: str):
        super().__init__(
            message="You have already voted on this design",
            details="Change the existing vote instead of casting a new one"
        )
        self.user_id = user_id
        self.design_id = design_id


class AlreadySubmittedError(RoomCraftException):
    """Raised when a user submits a second, different design for a theme."""

    def __init__(self, user_id: str, theme_id: str, design_id: str):
        super().__init__(
            message="You have already submitted a design for this theme",
            details=f"Design {design_id} is the submission for theme {theme_id}"
        )
        self.user_id = user_id
        self.theme_id = theme_id
        self.design_id = design_id


class VoteNotFoundError(RoomCraftException):
    """Raised when changing or removing a vote that does not exist."""

    def __init__(self, user_id: str, design_id: str):
        super().__init__(
            message="No existing vote found for this design",
            details="Cast a vote before changing or removing it"
        )
        self.user_id = user_id
        self.design_id = design_id


class ThemeNotFoundError(RoomCraftException):
    """Raised when a theme is not found."""

    def __init__(self, theme_id: str):
        super().__init__(
            message=f"Theme not found: {theme_id}",
            details="The requested theme does not exist"
        )
        self.theme_id = theme_id


class InvalidThemeError(RoomCraftException):
    """Raised when a theme's time window is not usable."""

    def __init__(self, theme_id: str, reason: str):
        super().__init__(
            message=f"Invalid theme {theme_id}: {reason}",
            details="Themes must end after they start"
        )
        self.theme_id = theme_id


class StoreOperationError(RoomCraftException):
    """Raised when the record store fails while performing an operation."""

    def __init__(self, operation: str, original_error: Exception | None = None):
        message = f"Failed to {operation}"
        if original_error:
            message += f": {str(original_error)}"
        super().__init__(
            message=message,
            details="The storage service is temporarily unavailable"
        )
        self.operation = operation
        self.original_error = original_error
