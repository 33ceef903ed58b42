"""Shared API dependencies: single import point for all routers.

Re-exports the database session and resolves the acting user, so that router
modules can import everything they need from one place::

    from shareit.api.deps import get_db, get_current_user_id
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from shareit.config import settings
from shareit.database import get_db
from shareit.services.booking_service import BookingService


async def get_current_user_id(
    user_id: int = Header(..., alias=settings.user_id_header, description="Id of the acting user"),
) -> int:
    """Return the id of the acting user forwarded by the gateway tier.

    The header is mandatory; FastAPI answers 422 when it is missing or not an
    integer. Whether the user exists is decided by the services.
    """
    return user_id


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    """Build a request-scoped booking service bound to the request's session."""
    return BookingService.for_session(db)


__all__ = [
    "get_db",
    "get_current_user_id",
    "get_booking_service",
]
