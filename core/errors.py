"""
Service error taxonomy.

Every failure a consultant operation can report is a ``ServiceError``
subclass carrying a closed ``ErrorKind`` and a client-safe message. The HTTP
layer maps kinds to status codes with ``STATUS_BY_KIND``; nothing below the
router knows about HTTP.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a service failure."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    STORAGE = "storage"
    STATE = "state"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.CONFLICT: 400,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORAGE: 400,
    ErrorKind.STATE: 400,
}


class ServiceError(Exception):
    """Base class for expected, client-reportable failures."""

    kind: ErrorKind = ErrorKind.STATE

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class ValidationError(ServiceError):
    """Malformed or missing input."""

    kind = ErrorKind.VALIDATION


class ConflictError(ServiceError):
    """The email already belongs to an account."""

    kind = ErrorKind.CONFLICT


class AuthorizationError(ServiceError):
    """The email is not in the employee directory."""

    kind = ErrorKind.AUTHORIZATION


class NotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND


class StorageError(ServiceError):
    """Relational or blob backend failure."""

    kind = ErrorKind.STORAGE


class StateError(ServiceError):
    """A write affected zero rows."""

    kind = ErrorKind.STATE


__all__ = [
    "ErrorKind",
    "STATUS_BY_KIND",
    "ServiceError",
    "ValidationError",
    "ConflictError",
    "AuthorizationError",
    "NotFoundError",
    "StorageError",
    "StateError",
]
