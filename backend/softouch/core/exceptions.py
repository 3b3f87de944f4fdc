"""
Domain error taxonomy.

Services raise these instead of HTTPException so the same rules apply no
matter which route triggers them. Handlers registered in main.py render
every error as ``{"message": ...}`` with the status code below.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class ConflictError(AppError):
    # Uniqueness and already-in-target-state violations surface as 400
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidStateError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid state transition"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Could not validate credentials"
