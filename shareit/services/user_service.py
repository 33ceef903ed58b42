"""User service: the user directory consumed by bookings and items."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from shareit.exceptions import ErrorReason, ShareItError
from shareit.models.user import User
from shareit.repositories import UserRepository

logger = logging.getLogger(__name__)


async def _ensure_email_free(users: UserRepository, email: str) -> None:
    if await users.get_by_email(email) is not None:
        raise ShareItError.conflict(ErrorReason.EMAIL_TAKEN, f"User with email {email} already exists")


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await UserRepository(db).get(user_id)
    if user is None:
        raise ShareItError.not_found(ErrorReason.USER, f"User {user_id} not found")
    return user


async def list_users(db: AsyncSession) -> list[User]:
    return await UserRepository(db).list_all()


async def create_user(db: AsyncSession, name: str, email: str) -> User:
    """Register a user. Emails are unique across the directory."""
    users = UserRepository(db)
    await _ensure_email_free(users, email)
    user = await users.add(User(name=name, email=email))
    logger.info("Created user %s", user.id)
    return user


async def update_user(
    db: AsyncSession,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Partially update a user; blank values are ignored."""
    users = UserRepository(db)
    user = await get_user(db, user_id)

    if name and name.strip():
        user.name = name
    if email and email.strip() and email != user.email:
        await _ensure_email_free(users, email)
        user.email = email

    return await users.save(user)


async def delete_user(db: AsyncSession, user_id: int) -> None:
    user = await get_user(db, user_id)
    await UserRepository(db).delete(user)
    logger.info("Deleted user %s", user_id)
