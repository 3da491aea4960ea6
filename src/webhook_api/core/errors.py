"""Typed domain errors.

Services raise these; the API layer maps them onto HTTP status codes and
surfaces the message to the client. Anything else is treated as unexpected.
"""

from fastapi import status


class ApiError(Exception):
    """Base class for errors whose message is safe to show to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequestError(ApiError):
    """Malformed input, e.g. an identifier that is not 24 hex characters."""

    status_code = status.HTTP_400_BAD_REQUEST


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT
