"""Data-access layer consumed by the services.

Each repository wraps the request-scoped ``AsyncSession``; nothing here holds
state between requests.
"""

from shareit.repositories.bookings import BookingCriteria, BookingRepository
from shareit.repositories.comments import CommentRepository
from shareit.repositories.items import ItemRepository
from shareit.repositories.users import UserRepository

__all__ = [
    "BookingCriteria",
    "BookingRepository",
    "CommentRepository",
    "ItemRepository",
    "UserRepository",
]
