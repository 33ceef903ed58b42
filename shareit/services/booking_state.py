"""Symbolic filters accepted by the booking list endpoints."""

import enum

from shareit.exceptions import ErrorReason, ShareItError


class BookingState(str, enum.Enum):
    """Query-time filter over a user's bookings. Never persisted.

    APPROVED is a valid booking status but deliberately not a filter value.
    """

    ALL = "ALL"
    CURRENT = "CURRENT"  # start <= now <= end
    PAST = "PAST"  # end < now
    FUTURE = "FUTURE"  # start > now
    WAITING = "WAITING"
    REJECTED = "REJECTED"


def parse_booking_state(raw: str | None) -> BookingState:
    """Parse a state token case-insensitively. ``None`` means ALL.

    Raises:
        ShareItError: INVALID_REQUEST / unknown_state for unrecognised tokens.
    """
    if raw is None:
        return BookingState.ALL
    try:
        return BookingState(raw.upper())
    except ValueError:
        raise ShareItError.invalid(ErrorReason.UNKNOWN_STATE, f"Unknown state: {raw}") from None
