"""Booking service: availability, approval workflow and access rules.

Every public method is meant to run inside one request-scoped transaction
(see ``shareit.database.get_db``). Checks fail fast in the documented order
and raise :class:`~shareit.exceptions.ShareItError`; nothing is written
unless every check passed.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import ErrorReason, ShareItError
from shareit.models.booking import Booking, BookingStatus
from shareit.repositories import BookingCriteria, BookingRepository, ItemRepository, UserRepository
from shareit.services.booking_state import BookingState, parse_booking_state

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
ITEM_NOT_FOUND = "Item not found"
BOOKING_NOT_FOUND = "Booking not found"


class BookingService:
    def __init__(
        self,
        users: UserRepository,
        items: ItemRepository,
        bookings: BookingRepository,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.users = users
        self.items = items
        self.bookings = bookings
        self.clock = clock

    @classmethod
    def for_session(cls, db: AsyncSession) -> "BookingService":
        return cls(UserRepository(db), ItemRepository(db), BookingRepository(db))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def create_booking(self, item_id: int, start: datetime, end: datetime, booker_id: int) -> Booking:
        """Request a booking of ``item_id`` for ``[start, end)``.

        The item row is locked before the overlap check so that concurrent
        requests for the same item are serialized.
        """
        booker = await self.users.get(booker_id)
        if booker is None:
            raise ShareItError.not_found(ErrorReason.USER, USER_NOT_FOUND)

        item = await self.items.get(item_id, for_update=True)
        if item is None:
            raise ShareItError.not_found(ErrorReason.ITEM, ITEM_NOT_FOUND)

        if not item.available:
            raise ShareItError.invalid(ErrorReason.ITEM_UNAVAILABLE, "Item is not available")

        if item.owner_id == booker_id:
            raise ShareItError.self_booking("Owner cannot book their own item")

        if await self.bookings.exists_overlapping_approved(item.id, start, end):
            logger.info("Rejected booking of item %s by user %s: overlaps an approved booking", item.id, booker_id)
            raise ShareItError.invalid(ErrorReason.OVERLAP, "Item is already booked for the requested period")

        booking = await self.bookings.insert(
            Booking(
                start=start,
                end=end,
                item=item,
                booker=booker,
                status=BookingStatus.WAITING,
            )
        )
        logger.info("Created booking %s of item %s by user %s", booking.id, item.id, booker_id)
        return booking

    async def set_approval(self, booking_id: int, user_id: int, approved: bool) -> Booking:
        """Approve or reject a WAITING booking. Only the item owner may decide."""
        booking = await self.bookings.get(booking_id, for_update=True)
        if booking is None:
            raise ShareItError.not_found(ErrorReason.BOOKING, BOOKING_NOT_FOUND)

        if booking.item.owner_id != user_id:
            raise ShareItError.forbidden(ErrorReason.NOT_OWNER, "Only the item owner can update the booking status")

        if booking.status.is_terminal:
            raise ShareItError.invalid(ErrorReason.ALREADY_DECIDED, "Booking status has already been decided")

        if approved and await self.bookings.exists_overlapping_approved(
            booking.item_id, booking.start, booking.end, exclude_id=booking.id
        ):
            raise ShareItError.invalid(ErrorReason.OVERLAP, "Item is already booked for the requested period")

        status = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
        booking = await self.bookings.update_status(booking, status)
        logger.info("Booking %s %s by owner %s", booking.id, status.value, user_id)
        return booking

    async def get_booking(self, booking_id: int, user_id: int) -> Booking:
        """Return a booking visible to its booker and to the item owner."""
        booking = await self.bookings.get(booking_id)
        if booking is None:
            raise ShareItError.not_found(ErrorReason.BOOKING, BOOKING_NOT_FOUND)

        if user_id not in (booking.booker_id, booking.item.owner_id):
            raise ShareItError.forbidden(ErrorReason.ACCESS_DENIED, "Access denied")

        return booking

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_by_booker(
        self,
        booker_id: int,
        state: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        """Bookings made by ``booker_id``, newest start first."""
        if not await self.users.exists(booker_id):
            raise ShareItError.not_found(ErrorReason.USER, USER_NOT_FOUND)

        booking_state = parse_booking_state(state)
        criteria = self._criteria_for(booking_state, booker_id=booker_id)
        return await self.bookings.query(criteria, offset=offset, limit=limit)

    async def list_by_owner(
        self,
        owner_id: int,
        state: str | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        """Bookings of every item owned by ``owner_id``, newest start first."""
        if not await self.users.exists(owner_id):
            raise ShareItError.not_found(ErrorReason.USER, USER_NOT_FOUND)

        booking_state = parse_booking_state(state)

        item_ids = await self.items.find_owned_ids(owner_id)
        if not item_ids:
            return []

        criteria = self._criteria_for(booking_state, item_ids=item_ids)
        return await self.bookings.query(criteria, offset=offset, limit=limit)

    def _criteria_for(
        self,
        state: BookingState,
        *,
        booker_id: int | None = None,
        item_ids: list[int] | None = None,
    ) -> BookingCriteria:
        scope = {"booker_id": booker_id, "item_ids": item_ids}
        if state is BookingState.ALL:
            return BookingCriteria(**scope)
        if state is BookingState.CURRENT:
            return BookingCriteria(**scope, active_at=self.clock())
        if state is BookingState.PAST:
            return BookingCriteria(**scope, ended_before=self.clock())
        if state is BookingState.FUTURE:
            return BookingCriteria(**scope, started_after=self.clock())
        # WAITING and REJECTED share their names with the booking status
        return BookingCriteria(**scope, status=BookingStatus(state.value))
