"""Pydantic v2 request/response schemas for item endpoints."""

from datetime import datetime

from pydantic import Field

from shareit.schemas.base import CamelModel
from shareit.services.item_service import ItemDetails

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ItemCreate(CamelModel):
    """Schema for listing a new item."""

    name: str = Field(..., min_length=1, max_length=255, pattern=r"\S")
    description: str = Field(..., min_length=1, max_length=1000, pattern=r"\S")
    available: bool


class ItemUpdate(CamelModel):
    """Schema for partially updating an item. All fields optional."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=1000)
    available: bool | None = None


class CommentCreate(CamelModel):
    text: str = Field(..., min_length=1, max_length=1000, pattern=r"\S")


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ItemBookingInfo(CamelModel):
    """Compact booking reference shown to item owners."""

    id: int
    booker_id: int
    start: datetime
    end: datetime


class CommentResponse(CamelModel):
    id: int
    text: str
    author_name: str
    created: datetime


class ItemResponse(CamelModel):
    id: int
    name: str
    description: str
    available: bool
    owner_id: int
    last_booking: ItemBookingInfo | None = None
    next_booking: ItemBookingInfo | None = None
    comments: list[CommentResponse] = Field(default_factory=list)

    @classmethod
    def from_details(cls, details: ItemDetails) -> "ItemResponse":
        response = cls.model_validate(details.item)
        if details.last_booking is not None:
            response.last_booking = ItemBookingInfo.model_validate(details.last_booking)
        if details.next_booking is not None:
            response.next_booking = ItemBookingInfo.model_validate(details.next_booking)
        response.comments = [CommentResponse.model_validate(c) for c in details.comments]
        return response
