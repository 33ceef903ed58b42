"""Comment model: feedback left on an item by someone who has borrowed it."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.database import Base, IntPrimaryKeyMixin


class Comment(IntPrimaryKeyMixin, Base):
    __tablename__ = "comments"

    text: Mapped[str] = mapped_column(String(1000), nullable=False)
    item_id: Mapped[int] = mapped_column(
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Relationships
    author: Mapped["User"] = relationship(lazy="selectin")  # type: ignore[name-defined]  # noqa: F821

    @property
    def author_name(self) -> str:
        return self.author.name

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, item_id={self.item_id}, author_id={self.author_id})>"
