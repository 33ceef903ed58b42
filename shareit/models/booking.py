"""Booking model: reservations of an item by a user for a time window."""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntPrimaryKeyMixin


APPROVED_OVERLAP_CONSTRAINT = "ex_bookings_approved_overlap"


class BookingStatus(str, enum.Enum):
    """Lifecycle status. WAITING is initial; APPROVED and REJECTED are terminal."""

    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not BookingStatus.WAITING


class Booking(IntPrimaryKeyMixin, Base):
    """A reservation linking a booker to an item for ``[start, end)``."""

    __tablename__ = "bookings"

    start: Mapped[datetime] = mapped_column("start_date", DateTime, nullable=False)
    end: Mapped[datetime] = mapped_column("end_date", DateTime, nullable=False)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    booker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, name="booking_status", native_enum=False, length=20),
        default=BookingStatus.WAITING,
        nullable=False,
        index=True,
    )

    # Relationships
    item: Mapped["Item"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821
    booker: Mapped["User"] = relationship(back_populates="bookings", lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_bookings_interval"),
        Index("ix_bookings_item_id_start_date", "item_id", "start_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, item_id={self.item_id}, booker_id={self.booker_id}, status={self.status})>"
        )
