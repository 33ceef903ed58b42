"""Pydantic v2 request/response schemas for booking endpoints."""

from datetime import datetime

from pydantic import field_validator, model_validator

from shareit.models.booking import BookingStatus
from shareit.schemas.base import CamelModel

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BookingCreate(CamelModel):
    """Schema for requesting a booking of an item."""

    item_id: int
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def to_naive_local(cls, value: datetime) -> datetime:
        """Bookings are stored as naive local timestamps."""
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value

    @model_validator(mode="after")
    def check_interval(self) -> "BookingCreate":
        """Validate that the window is in the future and end is strictly after start."""
        if self.end <= self.start:
            raise ValueError("end must be after start")
        if self.start < datetime.now():
            raise ValueError("start must not be in the past")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingBooker(CamelModel):
    id: int
    name: str


class BookingItem(CamelModel):
    id: int
    name: str


class BookingResponse(CamelModel):
    """Booking as returned to the booker or the item owner."""

    id: int
    start: datetime
    end: datetime
    status: BookingStatus
    booker: BookingBooker
    item: BookingItem
