"""Catalog error kinds.

Each error carries the kind the caller reports and the status category the
HTTP layer maps to a response code.
"""

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "InvalidInput"
    INVALID_REFERENCE = "InvalidReference"
    NOT_FOUND = "NotFound"
    INTERNAL = "Internal"


class StatusCategory(str, Enum):
    BAD_INPUT = "bad-input"
    NOT_FOUND = "not-found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


STATUS_CODES: dict[StatusCategory, int] = {
    StatusCategory.BAD_INPUT: 400,
    StatusCategory.NOT_FOUND: 404,
    StatusCategory.CONFLICT: 409,
    StatusCategory.INTERNAL: 500,
}


class CatalogError(Exception):
    """Base class for every error the catalog core reports."""

    kind: ErrorKind = ErrorKind.INTERNAL
    category: StatusCategory = StatusCategory.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.category]

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind.value, "detail": self.message}


class InvalidInputError(CatalogError):
    """Malformed, missing or empty input."""

    kind = ErrorKind.INVALID_INPUT
    category = StatusCategory.BAD_INPUT


class InvalidReferenceError(CatalogError):
    """A supplied category or variant identity does not resolve."""

    kind = ErrorKind.INVALID_REFERENCE
    category = StatusCategory.BAD_INPUT


class NotFoundError(CatalogError):
    kind = ErrorKind.NOT_FOUND
    category = StatusCategory.NOT_FOUND


class InternalError(CatalogError):
    """Unexpected store or normalizer failure."""

    kind = ErrorKind.INTERNAL
    category = StatusCategory.INTERNAL
