"""Booking storage: inserts, status updates, and range queries."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import ErrorReason, ShareItError
from shareit.models.booking import APPROVED_OVERLAP_CONSTRAINT, Booking, BookingStatus


@dataclass(frozen=True)
class BookingCriteria:
    """Filter for :meth:`BookingRepository.query`.

    Exactly one of ``booker_id`` / ``item_ids`` scopes the query. The optional
    predicates are AND-ed together:

    * ``status``: status equals the value
    * ``active_at``: ``start <= active_at <= end``
    * ``ended_before``: ``end < ended_before``
    * ``started_after``: ``start > started_after``
    """

    booker_id: int | None = None
    item_ids: Sequence[int] | None = None
    status: BookingStatus | None = None
    active_at: datetime | None = None
    ended_before: datetime | None = None
    started_after: datetime | None = None

    def __post_init__(self) -> None:
        if (self.booker_id is None) == (self.item_ids is None):
            raise ValueError("BookingCriteria needs exactly one of booker_id or item_ids")


class BookingRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self, booking_id: int, *, for_update: bool = False) -> Booking | None:
        """Fetch a booking by id, optionally locking the row for a status change."""
        query = select(Booking).where(Booking.id == booking_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def exists_overlapping_approved(
        self,
        item_id: int,
        start: datetime,
        end: datetime,
        exclude_id: int | None = None,
    ) -> bool:
        """True if an APPROVED booking of the item overlaps ``[start, end)``."""
        condition = [
            Booking.item_id == item_id,
            Booking.status == BookingStatus.APPROVED,
            Booking.start < end,
            Booking.end > start,
        ]
        if exclude_id is not None:
            condition.append(Booking.id != exclude_id)
        result = await self.db.execute(select(exists().where(*condition)))
        return bool(result.scalar())

    async def has_finished_approved(self, booker_id: int, item_id: int, now: datetime) -> bool:
        """True if the user has an APPROVED booking of the item that ended before ``now``."""
        result = await self.db.execute(
            select(
                exists().where(
                    Booking.booker_id == booker_id,
                    Booking.item_id == item_id,
                    Booking.status == BookingStatus.APPROVED,
                    Booking.end < now,
                )
            )
        )
        return bool(result.scalar())

    async def insert(self, booking: Booking) -> Booking:
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def update_status(self, booking: Booking, status: BookingStatus) -> Booking:
        booking.status = status
        try:
            await self.db.flush()
        except IntegrityError as exc:
            # PostgreSQL exclusion constraint installed by the initial migration
            if APPROVED_OVERLAP_CONSTRAINT in str(exc.orig):
                raise ShareItError.invalid(
                    ErrorReason.OVERLAP, "Item is already booked for the requested period"
                ) from exc
            raise
        return booking

    async def query(
        self,
        criteria: BookingCriteria,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Booking]:
        """Return matching bookings ordered by start time, newest first."""
        query = self._filtered(criteria).order_by(Booking.start.desc(), Booking.id.desc()).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def find_last_approved(self, item_ids: Sequence[int], now: datetime) -> dict[int, Booking]:
        """Latest APPROVED booking per item that ended before ``now``."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id.in_(item_ids),
                Booking.status == BookingStatus.APPROVED,
                Booking.end < now,
            )
            .order_by(Booking.end.desc())
        )
        last: dict[int, Booking] = {}
        for booking in result.scalars():
            last.setdefault(booking.item_id, booking)
        return last

    async def find_next_approved(self, item_ids: Sequence[int], now: datetime) -> dict[int, Booking]:
        """Earliest APPROVED booking per item that starts after ``now``."""
        result = await self.db.execute(
            select(Booking)
            .where(
                Booking.item_id.in_(item_ids),
                Booking.status == BookingStatus.APPROVED,
                Booking.start > now,
            )
            .order_by(Booking.start.asc())
        )
        upcoming: dict[int, Booking] = {}
        for booking in result.scalars():
            upcoming.setdefault(booking.item_id, booking)
        return upcoming

    @staticmethod
    def _filtered(criteria: BookingCriteria) -> Select:
        query = select(Booking)
        if criteria.booker_id is not None:
            query = query.where(Booking.booker_id == criteria.booker_id)
        else:
            query = query.where(Booking.item_id.in_(list(criteria.item_ids or ())))
        if criteria.status is not None:
            query = query.where(Booking.status == criteria.status)
        if criteria.active_at is not None:
            query = query.where(Booking.start <= criteria.active_at, Booking.end >= criteria.active_at)
        if criteria.ended_before is not None:
            query = query.where(Booking.end < criteria.ended_before)
        if criteria.started_after is not None:
            query = query.where(Booking.start > criteria.started_after)
        return query
