"""Application error hierarchy.

Services raise these; ``careerpath.main`` maps them to ``{"error": message}``
responses with the matching HTTP status.
"""

from fastapi import status


class CareerPathError(Exception):
    """Base error carrying an HTTP status and a caller-facing message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidRequestError(CareerPathError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(CareerPathError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(CareerPathError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(CareerPathError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CareerPathError):
    status_code = status.HTTP_409_CONFLICT


class StoredDataError(CareerPathError):
    """A serialized column could not be parsed back into its schema."""


class UpstreamServiceError(CareerPathError):
    """The identity provider or the language model failed."""
