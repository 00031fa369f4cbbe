# admin_auth/core/errors.py
from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    """
    Base for errors that the API renders as {"message": ...}.

    Handlers raise these; main.py maps them to a JSON response with `status_code`.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class UnauthorizedError(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"


class NotFoundError(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AuthError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(AuthError):
    pass
