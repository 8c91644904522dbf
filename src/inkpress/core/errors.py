"""Error taxonomy for the authentication core.

Every failure that can reach a caller is an :class:`AuthError` carrying a
closed :class:`ErrorKind` and a message that is safe to display. Internal
diagnostic text lives in ``detail`` and is only rendered outside production.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"

    @property
    def status_code(self) -> int:
        """HTTP status code for this kind."""
        return _STATUS_CODES[self]

    @property
    def label(self) -> str:
        """Short human-readable label used in error bodies."""
        return _LABELS[self]


_STATUS_CODES = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.CONFLICT: 409,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

_LABELS = {
    ErrorKind.BAD_REQUEST: "Bad request",
    ErrorKind.UNAUTHORIZED: "Unauthorized",
    ErrorKind.CONFLICT: "Conflict",
    ErrorKind.NOT_FOUND: "Not found",
    ErrorKind.INTERNAL: "Internal error",
}


class AuthError(Exception):
    """Base class for all caller-visible failures."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, detail: Any | None = None) -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class BadRequestError(AuthError):
    """Raised for malformed or missing input.

    ``errors`` lists per-field problems and, unlike ``detail``, is always
    safe to show.
    """

    kind = ErrorKind.BAD_REQUEST

    def __init__(
        self,
        message: str,
        errors: list[dict[str, str]] | None = None,
        detail: Any | None = None,
    ) -> None:
        super().__init__(message, detail)
        self.errors = errors or []


class UnauthorizedError(AuthError):
    """Raised for any credential, token, or account-status failure."""

    kind = ErrorKind.UNAUTHORIZED


class ConflictError(AuthError):
    """Raised when a uniqueness constraint would be violated."""

    kind = ErrorKind.CONFLICT


class NotFoundError(AuthError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class InternalError(AuthError):
    """Raised for unexpected store or hashing failures."""

    kind = ErrorKind.INTERNAL


class ConfigurationError(Exception):
    """Raised at startup when configuration cannot be used."""

    pass
