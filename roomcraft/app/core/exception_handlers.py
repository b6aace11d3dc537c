"""Exception handlers for converting custom exceptions to HTTP responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from roomcraft.app.core.exceptions import (
    RoomCraftException,
    AuthenticationRequiredError,
    CannotActForAnotherUserError,
    NotOwnerError,
    SelfVoteForbiddenError,
    DesignNotFoundError,
    InvalidAssetIndexError,
    InvalidColorError,
    VoteAlreadyExistsError,
    AlreadySubmittedError,
    VoteNotFoundError,
    ThemeNotFoundError,
    InvalidThemeError,
    StoreOperationError,
)


async def roomcraft_exception_handler(request: Request, exc: RoomCraftException) -> JSONResponse:
    """
    Handle all RoomCraft custom exceptions and convert to appropriate HTTP responses.

    Args:
        request: The incoming request
        exc: The exception that was raised

    Returns:
        JSONResponse with appropriate status code and error details
    """
    # Map exception types to HTTP status codes
    if isinstance(exc, AuthenticationRequiredError):
        status_code = status.HTTP_401_UNAUTHORIZED
    elif isinstance(exc, (CannotActForAnotherUserError, NotOwnerError, SelfVoteForbiddenError)):
        status_code = status.HTTP_403_FORBIDDEN
    elif isinstance(exc, (DesignNotFoundError, VoteNotFoundError, ThemeNotFoundError)):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (VoteAlreadyExistsError, AlreadySubmittedError)):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, (InvalidAssetIndexError, InvalidColorError, InvalidThemeError)):
        status_code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, StoreOperationError):
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        # Generic RoomCraftException
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(
        status_code=status_code,
        content={
            "detail": exc.message,
            "type": exc.__class__.__name__,
            **({"info": exc.details} if exc.details else {})
        }
    )


def register_exception_handlers(app):
    """
    Register all custom exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RoomCraftException, roomcraft_exception_handler)
