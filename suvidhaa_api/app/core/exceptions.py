"""
Domain exceptions raised by the service layer.

Services never build HTTP responses themselves; they raise one of the
exceptions below and the endpoint converts it into an ``HTTPException``
with the matching status code.  All of them derive from ``ValueError`` so
callers that only care about "the request was wrong" can catch that.
Failures of the document store itself are represented by ``StoreError``
in ``core.db`` and end up as HTTP 500.
"""

from fastapi import status


class ServiceError(ValueError):
    """Base class for errors caused by the caller's request."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Required fields are missing or have an unacceptable value."""


class DuplicateEmailError(ServiceError):
    """A user with the same e-mail address already exists."""


class AlreadyRegisteredError(ServiceError):
    """The user already owns a provider profile."""


class InvalidCredentialsError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND
