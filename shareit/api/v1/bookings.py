"""Bookings API router.

The acting user comes from the ``X-Sharer-User-Id`` header. Bookers create
requests; item owners approve or reject them; both sides can read them.
"""

from fastapi import APIRouter, Depends, Query, status

from shareit.api.deps import get_booking_service, get_current_user_id
from shareit.models.booking import Booking
from shareit.schemas.booking import BookingCreate, BookingResponse
from shareit.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Request a booking",
)
async def create_booking(
    body: BookingCreate,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Create a WAITING booking of an item for the acting user."""
    return await service.create_booking(body.item_id, body.start, body.end, user_id)


@router.patch(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Approve or reject a booking",
)
async def approve_booking(
    booking_id: int,
    approved: bool = Query(..., description="true to approve, false to reject"),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    return await service.set_approval(booking_id, user_id, approved)


@router.get(
    "/owner",
    response_model=list[BookingResponse],
    summary="List bookings of the acting user's items",
)
async def list_owner_bookings(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    from_: int = Query(0, alias="from", ge=0, description="Pagination offset"),
    size: int | None = Query(None, ge=1, description="Pagination limit"),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> list[Booking]:
    return await service.list_by_owner(user_id, state, offset=from_, limit=size)


@router.get(
    "/{booking_id}",
    response_model=BookingResponse,
    summary="Get a booking",
)
async def get_booking(
    booking_id: int,
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> Booking:
    """Only the booker and the item owner may read a booking."""
    return await service.get_booking(booking_id, user_id)


@router.get(
    "",
    response_model=list[BookingResponse],
    summary="List the acting user's bookings",
)
async def list_bookings(
    state: str = Query("ALL", description="ALL, CURRENT, PAST, FUTURE, WAITING or REJECTED"),
    from_: int = Query(0, alias="from", ge=0, description="Pagination offset"),
    size: int | None = Query(None, ge=1, description="Pagination limit"),
    user_id: int = Depends(get_current_user_id),
    service: BookingService = Depends(get_booking_service),
) -> list[Booking]:
    return await service.list_by_booker(user_id, state, offset=from_, limit=size)
