# =========================================================
# DOMAIN ERRORS
#
# Every recoverable failure carries an ErrorKind tag.
# The HTTP layer maps the tag to a status code in one place
# (see restaurant_api.main), services never build responses.
# =========================================================

import enum

from fastapi import status


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INVALID_TRANSITION = "invalid_transition"
    CONFLICT = "conflict"
    INVALID_CREDENTIAL = "invalid_credential"
    INVALID_FORMAT = "invalid_format"
    TOO_LARGE = "too_large"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_FORMAT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.TOO_LARGE: status.HTTP_413_CONTENT_TOO_LARGE,
}


class DomainError(Exception):
    kind: ErrorKind = ErrorKind.VALIDATION
    default_message = "Invalid request"

    def __init__(self, message: str | None = None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> dict:
        body = {"detail": self.message, "kind": self.kind.value}
        if self.details is not None:
            body["errors"] = self.details
        return body


class ValidationError(DomainError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid data"


class Unauthorized(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class InvalidTransition(DomainError):
    kind = ErrorKind.INVALID_TRANSITION
    default_message = "Invalid status transition"


class Conflict(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class InvalidCredential(DomainError):
    kind = ErrorKind.INVALID_CREDENTIAL
    default_message = "Invalid JWT token!"


class InvalidFormat(DomainError):
    kind = ErrorKind.INVALID_FORMAT
    default_message = "Invalid image format"


class TooLarge(DomainError):
    kind = ErrorKind.TOO_LARGE
    default_message = "File too large"
