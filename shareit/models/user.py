"""User model: marketplace participants (owners and bookers)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntPrimaryKeyMixin


class User(IntPrimaryKeyMixin, Base):
    """A marketplace user. The same account can both list and book items."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(512), unique=True, index=True, nullable=False)

    # Relationships
    items: Mapped[list["Item"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="owner", cascade="all, delete-orphan", passive_deletes=True
    )
    bookings: Mapped[list["Booking"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        back_populates="booker", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
