"""Closed error taxonomy shared by every service.

Services raise a single exception type, :class:`ShareItError`, tagged with an
:class:`ErrorKind` and a more specific :class:`ErrorReason`. Callers branch on
``error.kind`` / ``error.reason`` instead of on exception subclasses; the HTTP
layer maps each kind to one status code (see ``shareit.main``).
"""

from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_REQUEST = "INVALID_REQUEST"
    SELF_BOOKING_FORBIDDEN = "SELF_BOOKING_FORBIDDEN"
    CONFLICT = "CONFLICT"


class ErrorReason(str, Enum):
    # NOT_FOUND
    USER = "user"
    ITEM = "item"
    BOOKING = "booking"
    # FORBIDDEN
    ACCESS_DENIED = "access_denied"
    NOT_OWNER = "not_owner"
    # INVALID_REQUEST
    ITEM_UNAVAILABLE = "item_unavailable"
    OVERLAP = "overlap"
    ALREADY_DECIDED = "already_decided"
    UNKNOWN_STATE = "unknown_state"
    NOT_BORROWED = "not_borrowed"
    # SELF_BOOKING_FORBIDDEN
    SELF_BOOKING = "self_booking"
    # CONFLICT
    EMAIL_TAKEN = "email_taken"


_REASONS_BY_KIND: dict[ErrorKind, frozenset[ErrorReason]] = {
    ErrorKind.NOT_FOUND: frozenset({ErrorReason.USER, ErrorReason.ITEM, ErrorReason.BOOKING}),
    ErrorKind.FORBIDDEN: frozenset({ErrorReason.ACCESS_DENIED, ErrorReason.NOT_OWNER}),
    ErrorKind.INVALID_REQUEST: frozenset(
        {
            ErrorReason.ITEM_UNAVAILABLE,
            ErrorReason.OVERLAP,
            ErrorReason.ALREADY_DECIDED,
            ErrorReason.UNKNOWN_STATE,
            ErrorReason.NOT_BORROWED,
        }
    ),
    ErrorKind.SELF_BOOKING_FORBIDDEN: frozenset({ErrorReason.SELF_BOOKING}),
    ErrorKind.CONFLICT: frozenset({ErrorReason.EMAIL_TAKEN}),
}


class ShareItError(Exception):
    """A business rule rejected the request."""

    def __init__(self, kind: ErrorKind, reason: ErrorReason, message: str) -> None:
        if reason not in _REASONS_BY_KIND[kind]:
            raise ValueError(f"{reason.value!r} is not a valid reason for {kind.value}")
        super().__init__(message)
        self.kind = kind
        self.reason = reason
        self.message = message

    def __repr__(self) -> str:
        return f"<ShareItError kind={self.kind.value} reason={self.reason.value} message={self.message!r}>"

    # Convenience constructors -------------------------------------------------

    @classmethod
    def not_found(cls, reason: ErrorReason, message: str) -> "ShareItError":
        return cls(ErrorKind.NOT_FOUND, reason, message)

    @classmethod
    def forbidden(cls, reason: ErrorReason, message: str) -> "ShareItError":
        return cls(ErrorKind.FORBIDDEN, reason, message)

    @classmethod
    def invalid(cls, reason: ErrorReason, message: str) -> "ShareItError":
        return cls(ErrorKind.INVALID_REQUEST, reason, message)

    @classmethod
    def self_booking(cls, message: str) -> "ShareItError":
        return cls(ErrorKind.SELF_BOOKING_FORBIDDEN, ErrorReason.SELF_BOOKING, message)

    @classmethod
    def conflict(cls, reason: ErrorReason, message: str) -> "ShareItError":
        return cls(ErrorKind.CONFLICT, reason, message)
